# tests/test_config.py
import pytest

from cmdcore.engine import CommandBase, EngineConfig


def test_defaults():
    cfg = EngineConfig.from_env({})
    assert cfg == EngineConfig()
    assert cfg.process_flags is True
    assert cfg.listener_errors == "continue"


def test_reads_prefixed_variables():
    cfg = EngineConfig.from_env({
        "CMDLAB_PROCESS_FLAGS": "off",
        "CMDLAB_MAX_WORKERS": "3",
        "CMDLAB_LISTENER_ERRORS": "Abort",
    })
    assert cfg.process_flags is False
    assert cfg.max_workers == 3
    assert cfg.listener_errors == "abort"


@pytest.mark.parametrize("env", [
    {"CMDLAB_PROCESS_FLAGS": "maybe"},
    {"CMDLAB_MAX_WORKERS": "many"},
    {"CMDLAB_MAX_WORKERS": "0"},
    {"CMDLAB_LISTENER_ERRORS": "ignore"},
])
def test_invalid_values_raise(env):
    with pytest.raises(ValueError):
        EngineConfig.from_env(env)


def test_env_file_fills_gaps_only(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("CMDLAB_MAX_WORKERS=7\nCMDLAB_PROCESS_FLAGS=false\n")
    cfg = EngineConfig.from_env({"CMDLAB_PROCESS_FLAGS": "true"}, env_file=env_file)
    assert cfg.max_workers == 7
    assert cfg.process_flags is True


def test_engine_takes_process_flags_from_config():
    with CommandBase(EngineConfig(process_flags=False, max_workers=1)) as base:
        assert base.process_flags is False
        base.process_flags = True
        assert base.process_flags is True
