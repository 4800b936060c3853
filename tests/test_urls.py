import pytest

from r_sysdeps.errors import BinariesDisabledError, UnsupportedOsError
from r_sysdeps.models import Distro, OsIdentity, ServerStatus
from r_sysdeps.urls import binary_url, match_distro, source_url

from tests.conftest import SERVER, status_payload


def _distro(distribution: str, release: str, segment: str, binaries: bool = True) -> Distro:
    return Distro(
        binary_display_name=f"{distribution} {release}",
        binary_url_segment=segment,
        display_name=f"{distribution} {release}",
        distribution=distribution,
        release=release,
        sys_reqs_supported=True,
        binaries_supported=binaries,
    )


def _status(distros, binaries_enabled: bool = True) -> ServerStatus:
    return ServerStatus(
        version="1",
        build_date="today",
        r_configured=True,
        binaries_enabled=binaries_enabled,
        default_repo="cran",
        distros=distros,
    )


def test_source_url_is_plain_formatting():
    assert source_url(SERVER, "cran") == "https://SERVER/cran/latest"


def test_binary_url_round_trip():
    status = ServerStatus.from_api(status_payload())
    url = binary_url(SERVER, "cran", OsIdentity("ubuntu", "20.04"), status)
    assert url == "https://SERVER/cran/__linux__/focal/latest"


def test_release_prefix_matches_only_in_one_direction():
    distros = [_distro("ubuntu", "20", "focal")]
    assert match_distro(OsIdentity("ubuntu", "20.04"), distros) is distros[0]
    assert match_distro(OsIdentity("ubuntu", "2.04"), distros) is None
    coarse_host = [_distro("ubuntu", "20.04", "focal")]
    assert match_distro(OsIdentity("ubuntu", "20"), coarse_host) is None


def test_distribution_must_be_equal():
    distros = [_distro("ubuntu", "20", "focal")]
    assert match_distro(OsIdentity("debian", "20"), distros) is None
    assert match_distro(OsIdentity("Ubuntu", "20.04"), distros) is None


def test_first_matching_distro_wins():
    distros = [_distro("rhel", "8", "rhel8"), _distro("rhel", "8.7", "rhel87")]
    url = binary_url(SERVER, "cran", OsIdentity("rhel", "8.7"), _status(distros))
    assert url == "https://SERVER/cran/__linux__/rhel8/latest"


def test_unsupported_os():
    with pytest.raises(UnsupportedOsError) as excinfo:
        binary_url(SERVER, "cran", OsIdentity("alpine", "3.18"), _status([_distro("ubuntu", "20", "focal")]))
    assert "alpine-3.18" in str(excinfo.value)


def test_binaries_disabled_server_wide_even_with_capable_distro():
    status = _status([_distro("ubuntu", "20.04", "focal")], binaries_enabled=False)
    with pytest.raises(BinariesDisabledError) as excinfo:
        binary_url(SERVER, "cran", OsIdentity("ubuntu", "20.04"), status)
    assert excinfo.value.identity is None
    assert "on server" in str(excinfo.value)


def test_binaries_disabled_for_os():
    status = _status([_distro("centos", "7", "centos7", binaries=False)])
    with pytest.raises(BinariesDisabledError) as excinfo:
        binary_url(SERVER, "cran", OsIdentity("centos", "7.9"), status)
    assert excinfo.value.identity == OsIdentity("centos", "7.9")
    assert "centos-7.9" in str(excinfo.value)
