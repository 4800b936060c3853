import io
import json
import urllib.error
import urllib.request
from urllib.parse import parse_qs, urlsplit

import pytest

SERVER = "https://SERVER"


def status_payload(**overrides) -> dict:
    payload = {
        "version": "2023.04.0-6",
        "build_date": "2023-04-26T19:53:03Z",
        "r_configured": True,
        "binaries_enabled": True,
        "cran_repo": "cran",
        "distros": [
            {
                "binaryDisplay": "Ubuntu 20.04 (Focal)",
                "binaryURL": "focal",
                "display": "Ubuntu 20.04 (Focal)",
                "distribution": "ubuntu",
                "release": "20.04",
                "sysReqs": True,
                "binaries": True,
            },
            {
                "binaryDisplay": "CentOS 7",
                "binaryURL": "centos7",
                "display": "CentOS 7",
                "distribution": "centos",
                "release": "7",
                "sysReqs": True,
                "binaries": False,
            },
        ],
        "bioc_versions": [
            {"bioc_version": "3.9", "r_version": "3.6", "cran_snapshot": "2019-10-28"},
            {"bioc_version": "3.17", "r_version": "4.3", "cran_snapshot": "2023-10-20"},
        ],
    }
    payload.update(overrides)
    return payload


def repos_payload() -> list:
    return [
        {"id": 1, "name": "cran", "description": "CRAN packages", "type": "R"},
        {"id": 2, "name": "bioconductor", "type": "Bioconductor"},
        {"id": 3, "name": "CRAN", "description": None, "type": "R"},
    ]


def sysreqs_payload() -> dict:
    return {
        "requirements": [
            {
                "name": "curl",
                "requirements": {
                    "packages": ["libcurl4-openssl-dev", "libssl-dev"],
                    "install_scripts": ["apt-get install -y libcurl4-openssl-dev", "apt-get install -y libssl-dev"],
                },
            },
            {
                "name": "rJava",
                "requirements": {
                    "packages": ["default-jdk"],
                    "pre_install": [{"command": "apt-get", "script": "apt-get update"}],
                    "install_scripts": ["apt-get install -y default-jdk"],
                    "post_install": [{"command": "R", "script": "R CMD javareconf"}],
                },
            },
        ]
    }


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200):
        self._body = body
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeServer:
    """Answers urlopen calls from a table of path -> (status, body)."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, path: str, payload=None, *, status: int = 200, raw: bytes | None = None):
        body = raw if raw is not None else json.dumps(payload).encode()
        self.routes[path] = (status, body)

    def urlopen(self, req, timeout=None):
        url = req.full_url
        parts = urlsplit(url)
        self.requests.append({"url": url, "path": parts.path, "query": parse_qs(parts.query), "timeout": timeout})
        if parts.path not in self.routes:
            raise urllib.error.HTTPError(url, 404, "Not Found", {}, io.BytesIO(b""))
        status, body = self.routes[parts.path]
        if status >= 400:
            raise urllib.error.HTTPError(url, status, "error", {}, io.BytesIO(body))
        return FakeResponse(body, status)

    def paths(self) -> list:
        return [request["path"] for request in self.requests]


@pytest.fixture
def fake_server(monkeypatch):
    server = FakeServer()
    server.route("/__api__/status", status_payload())
    server.route("/__api__/repos", repos_payload())
    server.route("/__api__/repos/1/sysreqs", sysreqs_payload())
    monkeypatch.setattr(urllib.request, "urlopen", server.urlopen)
    return server


@pytest.fixture
def os_release(tmp_path):
    path = tmp_path / "os-release"
    path.write_text(
        'NAME="Ubuntu"\n'
        'VERSION="20.04.6 LTS (Focal Fossa)"\n'
        "ID=ubuntu\n"
        "ID_LIKE=debian\n"
        'VERSION_ID="20.04"\n'
        "HOME_URL=https://www.ubuntu.com/\n"
    )
    return path
