import argparse


def namespace_arg(value: str) -> str:
    value = value.strip()
    if not value:
        raise argparse.ArgumentTypeError("namespace must not be empty")
    return value


def add_namespace_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument("-n", "--namespace", required=True, type=namespace_arg, help="Kubernetes namespace")
