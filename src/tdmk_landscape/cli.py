"""
TD Mk Landscape Command-Line Interface

Provides the `tdmk` command for codomain and problem generation.
"""

import sys
import argparse
import logging
from pathlib import Path

from .codomain import CodomainFunction
from .configuration import get_rng
from .contract import InputParameters
from .errors import LandscapeError
from .generation import (
    generate_and_write_codomain,
    generate_codomains_from_configuration_file,
    generate_codomains_from_folder,
    generate_problem_from_codomain_file,
    generate_problems_from_configuration_folder,
)
from .solver import SolverConfig


def _solver_config(args) -> SolverConfig:
    return SolverConfig(max_optima=args.max_optima)


def cmd_codomain_instance(args):
    """Generate one codomain file from command line parameters."""
    input_parameters = InputParameters(args.m, args.k, args.o, args.b)
    tokens = [args.function] + ([args.parameter] if args.parameter is not None else [])
    codomain_function = CodomainFunction.from_tokens(tokens)

    rng = get_rng(args.seed)
    generate_and_write_codomain(input_parameters, codomain_function, args.output, rng)
    print(f"Codomain ({codomain_function}, {input_parameters.to_line()}) written to: {args.output}")
    return 0


def cmd_codomain_file(args):
    """Generate codomain files for a configuration file."""
    rng = get_rng(args.seed)
    written = generate_codomains_from_configuration_file(args.path, rng)
    print(f"Generated {len(written)} codomain files")
    return 0


def cmd_codomain_folder(args):
    """Generate codomain files for every configuration in the given folders."""
    rng = get_rng(args.seed)
    total = 0
    for folder_path in args.paths:
        total += len(generate_codomains_from_folder(folder_path, rng))
    print(f"Generated {total} codomain files")
    return 0


def cmd_problem_codomain_file(args):
    """Construct and solve a problem for an existing codomain file."""
    rng = get_rng(args.seed)
    clique_tree = generate_problem_from_codomain_file(
        args.codomain, args.output, rng,
        file_has_codomain_function=not args.no_function_line,
        config=_solver_config(args)
    )
    print(f"Parameters: {clique_tree.input_parameters.to_line()}")
    print(f"Global optimum: {clique_tree.glob_optima_score!r}")
    print(f"Number of global optima: {clique_tree.number_of_global_optima}")
    print(f"Problem written to: {args.output}")
    return 0


def cmd_problem_configuration_folder(args):
    """Generate problems for every configuration in the given folders."""
    rng = get_rng(args.seed)
    config = _solver_config(args)
    total = 0
    for folder_path in args.paths:
        total += len(generate_problems_from_configuration_folder(
            folder_path, args.number_of_problems, rng, config
        ))
    print(f"Generated {total} problems")
    return 0


def cmd_version(args):
    """Print version information."""
    from . import __version__
    print(f"tdmk-landscape {__version__}")
    print("TD Mk Landscape benchmark generation with exact global optima")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='tdmk',
        description='TD Mk Landscape - benchmark generation with known global optima'
    )
    parser.add_argument('--seed', '-s', type=int, default=None,
                        help='Seed for the bit source (default: OS entropy)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log debug output')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Codomain commands
    codomain_parser = subparsers.add_parser('codomain', help='Generate codomain files')
    codomain_sub = codomain_parser.add_subparsers(dest='codomain_command', help='Codomain sources')

    instance_parser = codomain_sub.add_parser('instance', help='Generate one codomain file')
    instance_parser.add_argument('m', type=int, help='Number of subfunctions')
    instance_parser.add_argument('k', type=int, help='Size of the subfunctions')
    instance_parser.add_argument('o', type=int, help='Number of overlapping bits between subfunctions')
    instance_parser.add_argument('b', type=int, help='Branching factor')
    instance_parser.add_argument('output', type=Path, help='Output file')
    instance_parser.add_argument('function', help='Codomain function name')
    instance_parser.add_argument('parameter', nargs='?', default=None,
                                 help='Codomain function parameter (q, p or p_deceptive)')
    instance_parser.set_defaults(func=cmd_codomain_instance)

    file_parser = codomain_sub.add_parser('file', help='Generate codomains for a configuration file')
    file_parser.add_argument('path', type=Path, help='Configuration file')
    file_parser.set_defaults(func=cmd_codomain_file)

    folder_parser = codomain_sub.add_parser('folder', help='Generate codomains for configuration folders')
    folder_parser.add_argument('paths', type=Path, nargs='+', help='Folders with a codomain_generation folder')
    folder_parser.set_defaults(func=cmd_codomain_folder)

    # Problem commands
    problem_parser = subparsers.add_parser('problem', help='Generate problems')
    problem_parser.add_argument('--max-optima', type=int, default=None,
                                help='Fail when more co-optimal strings exist (default: unbounded)')
    problem_sub = problem_parser.add_subparsers(dest='problem_command', help='Problem sources')

    codomain_file_parser = problem_sub.add_parser('codomain-file', help='Problem for a codomain file')
    codomain_file_parser.add_argument('codomain', type=Path, help='Codomain file')
    codomain_file_parser.add_argument('output', type=Path, help='Output problem file')
    codomain_file_parser.add_argument('--no-function-line', action='store_true',
                                      help='Codomain file starts with the M k o b line')
    codomain_file_parser.set_defaults(func=cmd_problem_codomain_file)

    configuration_parser = problem_sub.add_parser('configuration-folder',
                                                  help='Problems for configuration folders')
    configuration_parser.add_argument('paths', type=Path, nargs='+',
                                      help='Folders with a problem_generation folder')
    configuration_parser.add_argument('--number-of-problems', '-n', type=int, default=1,
                                      help='Problems per parameter tuple (default: 1)')
    configuration_parser.set_defaults(func=cmd_problem_configuration_folder)

    # Version command
    ver_parser = subparsers.add_parser('version', help='Print version')
    ver_parser.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    if not hasattr(args, 'func'):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except (LandscapeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
