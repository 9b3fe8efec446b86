import json

from helm_cleaner.commands.args import add_namespace_argument
from helm_cleaner.kube import create_core_v1, list_releases


def print_releases(releases: list[str], namespace: str, as_json: bool) -> None:
    if as_json:
        print(json.dumps(releases, indent=2))
        return

    if not releases:
        print(f"No Helm releases found in namespace '{namespace}'")
        return

    for r in releases:
        print(r)


def cmd_list(args) -> int:
    settings = args.settings
    v1 = create_core_v1(settings.kubeconfig, settings.context)
    releases = list_releases(
        v1,
        args.namespace,
        owner_selector=settings.owner_selector,
        name_label=settings.name_label,
    )
    print_releases(releases, args.namespace, args.json)
    return 0


def register_list_command(subparsers):
    p = subparsers.add_parser("list", help="List Helm releases in a namespace")
    add_namespace_argument(p)
    p.add_argument("--json", action="store_true", help="Print releases as a JSON array")
    p.set_defaults(func=cmd_list)
