from types import SimpleNamespace

import pytest
import yaml
from kubernetes.client.rest import ApiException
from urllib3.exceptions import MaxRetryError, NewConnectionError

import helm_cleaner.kube as kube
from fakes import FakeCoreV1, helm_secret
from helm_cleaner.errors import ClusterQueryError, NamespaceDeleteError
from helm_cleaner.kube import create_core_v1, delete_namespace, list_releases


def test_list_releases_dedupes_and_sorts():
    v1 = FakeCoreV1([helm_secret("app-b"), helm_secret("app-a"), helm_secret("app-a")])

    assert list_releases(v1, "demo") == ["app-a", "app-b"]


def test_list_releases_uses_owner_selector_and_namespace():
    v1 = FakeCoreV1()

    list_releases(v1, "demo", owner_selector="owner=helm")

    assert v1.list_calls == [("demo", "owner=helm")]


def test_list_releases_skips_secrets_without_name_label():
    v1 = FakeCoreV1(
        [
            helm_secret(),
            helm_secret(""),
            SimpleNamespace(metadata=SimpleNamespace(labels=None)),
            helm_secret("web"),
        ]
    )

    assert list_releases(v1, "demo") == ["web"]


def test_list_releases_custom_name_label():
    v1 = FakeCoreV1([helm_secret(release="x"), helm_secret(release="a")])

    assert list_releases(v1, "demo", name_label="release") == ["a", "x"]


def test_list_releases_empty():
    assert list_releases(FakeCoreV1(), "demo") == []


def test_list_releases_api_error_is_wrapped():
    v1 = FakeCoreV1(list_error=ApiException(status=403, reason="Forbidden"))

    with pytest.raises(ClusterQueryError) as exc:
        list_releases(v1, "demo")

    assert exc.value.status == 403
    assert "demo" in str(exc.value)


def test_delete_namespace_prints_confirmation(capsys):
    v1 = FakeCoreV1()

    delete_namespace(v1, "demo")

    assert v1.deleted == ["demo"]
    assert "✅ Namespace 'demo' deleted" in capsys.readouterr().out


def test_delete_namespace_api_error():
    v1 = FakeCoreV1(delete_error=ApiException(status=404, reason="Not Found"))

    with pytest.raises(NamespaceDeleteError) as exc:
        delete_namespace(v1, "demo")

    assert exc.value.status == 404
    assert exc.value.namespace == "demo"


def test_list_releases_connection_error_is_wrapped():
    v1 = FakeCoreV1(list_error=MaxRetryError(None, "/api/v1/namespaces/demo/secrets"))

    with pytest.raises(ClusterQueryError) as exc:
        list_releases(v1, "demo")

    assert exc.value.status is None
    assert "demo" in str(exc.value)


def test_delete_namespace_connection_error_is_wrapped(capsys):
    v1 = FakeCoreV1(delete_error=NewConnectionError(None, "Connection refused"))

    with pytest.raises(NamespaceDeleteError) as exc:
        delete_namespace(v1, "demo")

    assert exc.value.status is None
    assert "deleted" not in capsys.readouterr().out


@pytest.mark.parametrize(
    "error",
    [yaml.YAMLError("mapping values are not allowed here"), OSError("exec plugin failed")],
)
def test_create_core_v1_wraps_kubeconfig_load_failures(monkeypatch, error):
    def load_kube_config(config_file=None, context=None):
        raise error

    monkeypatch.setattr(kube.config, "load_kube_config", load_kube_config)

    with pytest.raises(ClusterQueryError) as exc:
        create_core_v1("/tmp/kubeconfig")

    assert "Could not load Kubernetes configuration" in str(exc.value)
