import pytest

from kubeadm_install.errors import VersionResolutionError
from kubeadm_install.lib.versions import (
    GITHUB_LATEST_RELEASE,
    K8S_STABLE_URL,
    get_latest_k8s_version,
    get_latest_version,
    normalize_version,
    resolve_versions,
)


def _latest(repo):
    return GITHUB_LATEST_RELEASE.format(repo=repo)


@pytest.mark.parametrize(
    "given,expected",
    [("v1.7.27", "1.7.27"), ("1.7.27", "1.7.27"), (" v1.33\n", "1.33"), ("vv1", "v1")],
)
def test_normalize_version_strips_one_leading_v(given, expected):
    assert normalize_version(given) == expected


def test_get_latest_version_reads_tag_name(web):
    web.add_json(_latest("opencontainers/runc"), {"tag_name": "v1.3.0", "name": "runc 1.3.0"})
    assert get_latest_version("opencontainers/runc") == "1.3.0"


def test_get_latest_version_fails_on_missing_tag(web):
    web.add_json(_latest("opencontainers/runc"), {"message": "API rate limit exceeded"})
    with pytest.raises(VersionResolutionError, match="opencontainers/runc"):
        get_latest_version("opencontainers/runc")


def test_get_latest_version_fails_on_http_error(web):
    with pytest.raises(VersionResolutionError, match="network connection"):
        get_latest_version("no/such-repo")


def test_get_latest_version_fails_on_malformed_json(web):
    web.add(_latest("containerd/containerd"), "<html>oops</html>")
    with pytest.raises(VersionResolutionError):
        get_latest_version("containerd/containerd")


def test_get_latest_k8s_version_truncates_to_minor(web):
    web.add(K8S_STABLE_URL, "v1.34.1")
    assert get_latest_k8s_version() == "1.34"


def test_get_latest_k8s_version_empty(web):
    web.add(K8S_STABLE_URL, "")
    with pytest.raises(VersionResolutionError, match="stable Kubernetes version"):
        get_latest_k8s_version()


def test_resolve_versions_only_queries_unset(web):
    web.add_json(_latest("opencontainers/runc"), {"tag_name": "v1.3.0"})
    web.add_json(_latest("containernetworking/plugins"), {"tag_name": "v1.7.1"})

    v = resolve_versions(containerd="v2.1.3", kubernetes="1.33")

    assert v.containerd == "2.1.3"
    assert v.kubernetes == "1.33"
    assert v.runc == "1.3.0"
    assert v.cni_plugins == "1.7.1"
    assert web.count(_latest("opencontainers/runc")) == 1
    assert web.count(_latest("containernetworking/plugins")) == 1
    assert web.count(_latest("containerd/containerd")) == 0
    assert web.count(K8S_STABLE_URL) == 0


def test_resolve_versions_pinned_makes_no_requests(web):
    v = resolve_versions(containerd="2.1.3", runc="v1.3.0", cni_plugins="v1.7.1", kubernetes="v1.33")
    assert (v.containerd, v.runc, v.cni_plugins, v.kubernetes) == ("2.1.3", "1.3.0", "1.7.1", "1.33")
    assert web.calls == []


@pytest.mark.parametrize("given", ["v", " v ", ""])
def test_resolve_versions_bare_v_falls_back_to_latest(web, given):
    web.add_json(_latest("containerd/containerd"), {"tag_name": "v2.1.3"})
    web.add(K8S_STABLE_URL, "v1.34.1\n")

    v = resolve_versions(containerd=given, runc="1.3.0", cni_plugins="1.7.1", kubernetes=given)

    assert v.containerd == "2.1.3"
    assert v.kubernetes == "1.34"
    assert web.count(_latest("containerd/containerd")) == 1
    assert web.count(K8S_STABLE_URL) == 1
