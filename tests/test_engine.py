"""
Singular session tests that do not need a Singular installation.
"""

import pytest

from hyperchain.engine import (
    SingularConfig,
    SingularError,
    SingularNotFoundError,
    SingularSession,
    _check_output,
)


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("HYPERCHAIN_SINGULAR", "/opt/singular/bin/Singular")
    monkeypatch.setenv("HYPERCHAIN_SINGULAR_TIMEOUT", "30")
    config = SingularConfig.from_env()
    assert config.executable == "/opt/singular/bin/Singular"
    assert config.timeout == 30.0


def test_config_from_env_defaults(monkeypatch):
    monkeypatch.delenv("HYPERCHAIN_SINGULAR", raising=False)
    monkeypatch.delenv("HYPERCHAIN_SINGULAR_TIMEOUT", raising=False)
    config = SingularConfig.from_env()
    assert config.executable == "Singular"
    assert config.timeout == 120.0


def test_config_rejects_bad_timeout(monkeypatch):
    monkeypatch.setenv("HYPERCHAIN_SINGULAR_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        SingularConfig.from_env()


def test_script_loads_library_and_quits():
    session = SingularSession(SingularConfig())
    script = session.script(["ring R = 0,(x),dp;"])
    lines = script.splitlines()
    assert lines[0] == 'LIB "paraplanecurves.lib";'
    assert "ring R = 0,(x),dp;" in lines
    assert lines[-1] == "quit;"


def test_missing_executable():
    session = SingularSession(SingularConfig(executable="hyperchain-missing-singular-binary"))
    assert not session.available()
    with pytest.raises(SingularNotFoundError):
        session.run("quit;\n")


def test_engine_errors_are_raised():
    with pytest.raises(SingularError) as info:
        _check_output("   ? `f` is not defined\n   ? error occurred in or before STDIN line 3\n")
    assert "`f` is not defined" in str(info.value)


def test_engine_comments_are_not_errors():
    _check_output("// ** redefining @k\n@@BEGIN a\n@@END a\n")


class _ScriptedSession(SingularSession):
    def __init__(self, output):
        super().__init__(SingularConfig())
        self.output = output

    def run(self, script):
        return self.output


def test_call_parses_blocks():
    session = _ScriptedSession("@@BEGIN J\nx\n@@END J\n")
    assert session.call("demo", []) == {"J": ["x"]}


def test_call_reports_malformed_output():
    session = _ScriptedSession("@@BEGIN J\nx\n")
    with pytest.raises(SingularError):
        session.call("demo", [])
