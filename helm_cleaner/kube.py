from __future__ import annotations

import os

import urllib3
import yaml
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from helm_cleaner.errors import ClusterQueryError, NamespaceDeleteError
from helm_cleaner.log import get_logger

logger = get_logger(__name__)


def create_core_v1(kubeconfig: str | None = None, context: str | None = None) -> client.CoreV1Api:
    """
    Build the one CoreV1Api handle the whole run shares.
    Falls back to in-cluster config when running inside a pod without a kubeconfig.
    """
    try:
        config.load_kube_config(config_file=kubeconfig, context=context)
    except ConfigException as e:
        if kubeconfig or context or not os.getenv("KUBERNETES_SERVICE_HOST"):
            raise ClusterQueryError(f"Could not load Kubernetes configuration: {e}") from e
        logger.debug("No kubeconfig found, using in-cluster configuration")
        try:
            config.load_incluster_config()
        except ConfigException as e2:
            raise ClusterQueryError(f"Could not load Kubernetes configuration: {e2}") from e2
    except (yaml.YAMLError, OSError, ValueError) as e:
        # Malformed kubeconfig or a failing exec credential plugin.
        raise ClusterQueryError(f"Could not load Kubernetes configuration: {e}") from e
    return client.CoreV1Api()


def list_releases(
    v1: client.CoreV1Api,
    namespace: str,
    *,
    owner_selector: str = "owner=helm",
    name_label: str = "name",
) -> list[str]:
    """
    Helm stores each release revision as a Secret labelled owner=helm,name=<release>.
    Returns the distinct release names, sorted.
    """
    logger.debug("Listing secrets in %s with selector %s", namespace, owner_selector)
    try:
        secrets = v1.list_namespaced_secret(
            namespace=namespace,
            label_selector=owner_selector,
        ).items
    except ApiException as e:
        raise ClusterQueryError(
            f"Failed to list Helm releases in namespace '{namespace}': {e.status} {e.reason}",
            status=e.status,
        ) from e
    except urllib3.exceptions.HTTPError as e:
        raise ClusterQueryError(
            f"Failed to list Helm releases in namespace '{namespace}': {e}",
            status=None,
        ) from e

    names = set()
    skipped = 0
    for s in secrets:
        labels = (s.metadata.labels if s.metadata else None) or {}
        name = labels.get(name_label)
        if not name:
            skipped += 1
            continue
        names.add(name)

    logger.debug("Scanned %d secrets, skipped %d without a '%s' label", len(secrets), skipped, name_label)
    return sorted(names)


def delete_namespace(v1: client.CoreV1Api, namespace: str) -> None:
    # Deletion is asynchronous on the server; an accepted request is success.
    try:
        v1.delete_namespace(namespace)
    except ApiException as e:
        raise NamespaceDeleteError(namespace, e.status, f"{e.status} {e.reason}") from e
    except urllib3.exceptions.HTTPError as e:
        raise NamespaceDeleteError(namespace, None, str(e)) from e
    print(f"✅ Namespace '{namespace}' deleted")
