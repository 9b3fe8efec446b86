from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Union

ALL_RELEASES_LABEL = "<ALL RELEASES>"

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


@dataclass(frozen=True)
class SingleRelease:
    name: str


@dataclass(frozen=True)
class AllReleases:
    pass


Selection = Union[SingleRelease, AllReleases]


class SelectionAborted(Exception):
    """Operator closed stdin or hit Ctrl-C at the chooser."""


def resolve(selection: Selection, releases: Sequence[str]) -> list[str]:
    if isinstance(selection, AllReleases):
        return list(releases)
    return [selection.name]


def choose_release(
    releases: Sequence[str],
    *,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> Selection:
    """
    Numbered menu of the releases plus one "all" entry.
    Empty input picks the first entry; anything unparseable asks again.
    """
    entries = list(releases) + [ALL_RELEASES_LABEL]
    output_fn("Select a release to uninstall:")
    for i, entry in enumerate(entries, start=1):
        output_fn(f"  {i}) {entry}")

    while True:
        try:
            raw = input_fn(f"Enter number [1-{len(entries)}] (default 1): ").strip()
        except (EOFError, KeyboardInterrupt) as e:
            raise SelectionAborted() from e

        if not raw:
            idx = 0
        elif raw.isdigit() and 1 <= int(raw) <= len(entries):
            idx = int(raw) - 1
        else:
            output_fn(f"Invalid choice: {raw}")
            continue

        if idx == len(releases):
            return AllReleases()
        return SingleRelease(releases[idx])


def confirm(
    releases: Sequence[str],
    namespace: str,
    *,
    delete_namespace: bool,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> bool:
    if len(releases) == 1:
        output_fn(f"About to uninstall release '{releases[0]}' in namespace '{namespace}'.")
    else:
        output_fn(f"About to uninstall all releases ({', '.join(releases)}) in namespace '{namespace}'.")

    if delete_namespace:
        output_fn(f"⚠️  Namespace '{namespace}' will also be deleted.")

    output_fn("Proceed? [y/N]")
    try:
        answer = input_fn("")
    except EOFError:
        return False
    return answer.strip().lower() == "y"
