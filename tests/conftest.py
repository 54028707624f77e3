import hashlib
import json
import logging
import subprocess

import pytest
import requests

from kubeadm_install import main as main_mod
from kubeadm_install.config import ComponentVersions, NodeConfig, NodeCtx, RunMode
from kubeadm_install.lib import command

# ----------------- Fake HTTP -----------------


class FakeResponse:
    def __init__(self, url, body=b"", status=200):
        self.url = url
        self.status_code = status
        self.content = body if isinstance(body, bytes) else body.encode()
        self.closed = False

    @property
    def text(self):
        return self.content.decode()

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} for {self.url}")

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]

    def close(self):
        self.closed = True


class FakeWeb:
    """url -> body routing table; records every GET."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.responses = []

    def add(self, url, body, status=200):
        self.routes[url] = (body, status)

    def add_json(self, url, obj):
        self.add(url, json.dumps(obj))

    def add_artifact(self, url, payload, sums_url, sums_name=None, digest=None):
        """Serve payload at url and a sha256sum listing for it at sums_url."""
        name = sums_name or url.rsplit("/", 1)[-1]
        digest = digest or hashlib.sha256(payload).hexdigest()
        self.add(url, payload)
        self.add(sums_url, f"{digest}  {name}\n")

    def count(self, url):
        return sum(1 for u in self.calls if u == url)

    def get(self, url, **kwargs):
        self.calls.append(url)
        body, status = self.routes.get(url, (b"not found", 404))
        r = FakeResponse(url, body, status)
        self.responses.append(r)
        return r


@pytest.fixture
def web(monkeypatch):
    w = FakeWeb()
    monkeypatch.setattr(requests, "get", w.get)
    return w


# ----------------- Fake subprocess -----------------


class FakeRunner:
    """Records argv of every command; replies by argv prefix."""

    def __init__(self):
        self.calls = []
        self.replies = []
        self.envs = []

    def on(self, prefix, stdout="", returncode=0, stderr="", effect=None):
        self.replies.append((list(prefix), stdout, returncode, stderr, effect))

    def ran(self, prefix):
        return [c for c in self.calls if c[: len(prefix)] == list(prefix)]

    def index(self, prefix):
        for i, c in enumerate(self.calls):
            if c[: len(prefix)] == list(prefix):
                return i
        raise AssertionError(f"{prefix} never ran; calls={self.calls}")

    def __call__(self, argv, input=None, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.envs.append(kwargs.get("env") or {})
        for prefix, stdout, rc, stderr, effect in self.replies:
            if argv[: len(prefix)] == prefix:
                if effect:
                    effect(argv)
                return subprocess.CompletedProcess(argv, rc, stdout, stderr)
        return subprocess.CompletedProcess(argv, 0, "", "")


@pytest.fixture
def runner(monkeypatch):
    r = FakeRunner()
    monkeypatch.setattr(command.subprocess, "run", r)
    return r


# ----------------- Common -----------------


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch, caplog):
    monkeypatch.setattr(main_mod, "configure_console_logging", lambda *a, **k: None)
    monkeypatch.setattr(main_mod, "configure_file_logging", lambda log_path, *a, **k: log_path)
    caplog.set_level(logging.DEBUG)


@pytest.fixture
def versions():
    return ComponentVersions(containerd="2.1.3", runc="1.3.0", cni_plugins="1.7.1", kubernetes="1.33")


@pytest.fixture
def make_ctx(tmp_path, versions):
    def _make(mode=RunMode.WORKER, dry_run=False, arch="amd64"):
        cfg = NodeConfig(versions=versions, mode=mode, arch=arch, dry_run=dry_run)
        return NodeCtx(cfg=cfg, root=str(tmp_path))

    return _make

