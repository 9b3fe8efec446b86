import argparse
import sys

from helm_cleaner.commands.completions import register_completions_command
from helm_cleaner.commands.list_cmd import register_list_command
from helm_cleaner.commands.uninstall import register_uninstall_command
from helm_cleaner.config import Settings
from helm_cleaner.errors import HelmCleanerError
from helm_cleaner.log import get_logger, setup_logging

__version__ = "0.1.0"

logger = get_logger("helm_cleaner")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="helm-cleaner", description="Helm Cleaner CLI")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--kubeconfig", help="Path to the kubeconfig file to use")
    parser.add_argument("--context", help="Kubeconfig context to use")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    register_uninstall_command(sub)
    register_list_command(sub)
    register_completions_command(sub)

    parser.set_defaults(root_parser=parser)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if getattr(args, "needs_settings", True):
            args.settings = Settings.load(
                kubeconfig=args.kubeconfig,
                context=args.context,
                verbose=args.verbose,
            )
            setup_logging(args.settings.verbose)
            logger.debug("Settings: %s", args.settings)
        code = args.func(args)
    except HelmCleanerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        sys.exit(130)

    sys.exit(code or 0)


if __name__ == "__main__":
    main()
