from __future__ import annotations

from typing import Callable, Sequence

from kubernetes import client

from helm_cleaner.commands.args import add_namespace_argument
from helm_cleaner.config import Settings
from helm_cleaner.helm_ops import HelmUninstaller, Uninstaller
from helm_cleaner.kube import create_core_v1, delete_namespace, list_releases
from helm_cleaner.log import get_logger
from helm_cleaner.selection import (
    Selection,
    SelectionAborted,
    SingleRelease,
    choose_release,
    confirm,
    resolve,
)

logger = get_logger(__name__)

Chooser = Callable[[Sequence[str]], Selection]
Confirmer = Callable[..., bool]


def run_uninstall(
    v1: client.CoreV1Api,
    settings: Settings,
    *,
    namespace: str,
    release: str | None,
    delete_ns: bool,
    force: bool,
    uninstaller: Uninstaller,
    chooser: Chooser = choose_release,
    confirmer: Confirmer = confirm,
) -> int:
    """
    List -> select -> confirm -> uninstall each -> maybe delete namespace.
    Any error raised along the way stops the run; nothing already done is undone.
    """
    releases = list_releases(
        v1,
        namespace,
        owner_selector=settings.owner_selector,
        name_label=settings.name_label,
    )
    if not releases:
        print(f"No Helm releases found in namespace '{namespace}'")
        return 0

    if release:
        selection: Selection = SingleRelease(release)
    else:
        try:
            selection = chooser(releases)
        except SelectionAborted:
            print("Aborted.")
            return 0

    selected = resolve(selection, releases)
    logger.debug("Selected releases: %s", selected)

    if not force and not confirmer(selected, namespace, delete_namespace=delete_ns):
        print("Aborted.")
        return 0

    for name in selected:
        uninstaller.run(name, namespace)

    if delete_ns:
        delete_namespace(v1, namespace)

    return 0


def cmd_uninstall(args) -> int:
    settings: Settings = args.settings
    v1 = create_core_v1(settings.kubeconfig, settings.context)
    return run_uninstall(
        v1,
        settings,
        namespace=args.namespace,
        release=args.release,
        delete_ns=args.delete_namespace,
        force=args.force,
        uninstaller=HelmUninstaller(settings.helm_bin),
    )


def register_uninstall_command(subparsers):
    p = subparsers.add_parser("uninstall", help="Uninstall Helm releases from a namespace")
    add_namespace_argument(p)
    p.add_argument("-r", "--release", help="Helm release name (omit to pick interactively)")
    p.add_argument("--delete-namespace", action="store_true", help="Delete the namespace after uninstall")
    p.add_argument("--force", action="store_true", help="Skip confirmation prompts")
    p.set_defaults(func=cmd_uninstall)
