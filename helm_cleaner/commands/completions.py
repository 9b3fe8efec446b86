from __future__ import annotations

import argparse

_TEMPLATE = """\
# bash completion for {prog}
_{func}() {{
    local cur prev cmd
    COMPREPLY=()
    cur="${{COMP_WORDS[COMP_CWORD]}}"
    prev="${{COMP_WORDS[COMP_CWORD-1]}}"
    cmd=""
    for word in "${{COMP_WORDS[@]:1:COMP_CWORD-1}}"; do
        case "$word" in
            {command_pattern}) cmd="$word"; break ;;
        esac
    done

    case "$prev" in
        --kubeconfig)
            COMPREPLY=( $(compgen -f -- "$cur") )
            return 0
            ;;
    esac

    case "$cmd" in
{command_cases}
        *)
            COMPREPLY=( $(compgen -W "{top_words}" -- "$cur") )
            ;;
    esac
    return 0
}}
complete -F _{func} {prog}
"""

_CASE = """\
        {name})
            COMPREPLY=( $(compgen -W "{words}" -- "$cur") )
            ;;"""


def _walk(parser: argparse.ArgumentParser) -> tuple[list[str], dict[str, argparse.ArgumentParser]]:
    # argparse exposes no public API for this; relies on the private _actions list
    # and _SubParsersAction, which may change between Python releases.
    options: list[str] = []
    subs: dict[str, argparse.ArgumentParser] = {}
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            subs.update(action.choices)
            continue
        options.extend(action.option_strings)
    return options, subs


def bash_completion_script(parser: argparse.ArgumentParser) -> str:
    prog = parser.prog
    top_options, subs = _walk(parser)

    cases = "\n".join(
        _CASE.format(name=name, words=" ".join(_walk(sub)[0]))
        for name, sub in subs.items()
    )
    top_words = " ".join(list(subs) + top_options)

    return _TEMPLATE.format(
        prog=prog,
        func=prog.replace("-", "_"),
        command_pattern="|".join(subs) or "__none__",
        command_cases=cases,
        top_words=top_words,
    )


def cmd_completions(args) -> int:
    print(bash_completion_script(args.root_parser), end="")
    return 0


def register_completions_command(subparsers):
    p = subparsers.add_parser("completions", help="Generate bash completions")
    p.add_argument("--shell", choices=["bash"], default="bash", help="Target shell (default: bash)")
    p.set_defaults(func=cmd_completions, needs_settings=False)
