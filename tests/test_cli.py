"""Tests for the sso-ephemeris command line."""

from __future__ import annotations

import logging

import pytest

from sso_ephemeris.cli.main import main


def test_cli_table_for_selected_bodies(capsys: pytest.CaptureFixture[str]) -> None:
    """Selected bodies get one row each under the header."""

    code = main(['--tt', '60000', '--bodies', 'sun', 'mars', 'Jupiter'])
    out = capsys.readouterr().out

    assert code == 0
    lines = out.splitlines()
    assert lines[0].startswith('TT (MJD) = 60000.000000')
    assert lines[1].split()[0] == 'Body'
    assert [line.split()[0] for line in lines[2:]] == ['Sun', 'Mars', 'Jupiter']
    assert 'n/a' in lines[2]


def test_cli_full_catalog_from_utc(capsys: pytest.CaptureFixture[str]) -> None:
    """Without --bodies every catalog body except Earth is listed."""

    code = main(['--time', '2023-02-25 00:00:00', '--no-light-time'])
    out = capsys.readouterr().out

    assert code == 0
    names = [line.split()[0] for line in out.splitlines()[2:]]
    assert 'Earth' not in names
    assert {'Sun', 'Moon', 'Saturn', 'Titan', 'Pluto'} <= set(names)


def test_cli_unknown_body(capsys: pytest.CaptureFixture[str]) -> None:
    """Unknown body names are reported and give exit code 1."""

    code = main(['--tt', '60000', '--bodies', 'vulcan'])
    err = capsys.readouterr().err

    assert code == 1
    assert err.startswith('Error: Unknown body')


def test_cli_bad_time(capsys: pytest.CaptureFixture[str]) -> None:
    """An unparsable UTC time is an error, not a traceback."""

    code = main(['--time', 'yesterday-ish', '--bodies', 'mars'])

    assert code == 1
    assert 'Invalid UTC time' in capsys.readouterr().err


def test_cli_catalog_env(tmp_path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    """SSO_CATALOG_PATH selects the catalog file."""

    ini = tmp_path / 'tiny.ini'
    ini.write_text(
        '[sun]\nhorizons_id = 10\nradius = 695508 km\n\n'
        '[earth]\nhorizons_id = 399\nparent = sun\nradius = 6371 km\n'
    )
    monkeypatch.setenv('SSO_CATALOG_PATH', str(ini))

    assert main(['--tt', '60000']) == 0
    rows = capsys.readouterr().out.splitlines()[2:]
    assert [row.split()[0] for row in rows] == ['Sun']


def test_cli_logs_table_size(caplog: pytest.LogCaptureFixture, capsys) -> None:
    """The number of tabulated bodies and the epoch are logged at DEBUG."""

    with caplog.at_level(logging.DEBUG, logger='sso_ephemeris.cli.main'):
        assert main(['--tt', '60000', '--bodies', 'mars', 'venus']) == 0
    capsys.readouterr()

    assert any(
        r.name == 'sso_ephemeris.cli.main' and 'Tabulating 2 bodies' in r.getMessage()
        for r in caplog.records
    )
