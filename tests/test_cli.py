import json
from unittest.mock import patch

from emulated_devices.__main__ import load_state, main, parse_args
from emulated_devices.const import DEFAULT_STATE, SIMULATOR_HOST, SIMULATOR_PORT, VERSION_INFO


def test_defaults():
    args = parse_args([])
    assert args.host == SIMULATOR_HOST
    assert args.port == SIMULATOR_PORT
    assert args.state is None
    assert args.debug is False


def test_load_state_default():
    assert load_state(None).snapshot() == DEFAULT_STATE


def test_load_state_from_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"vehicles": [{"soc": 5, "range": 20}]}), encoding="utf-8")

    state = load_state(str(path))

    assert state.vehicle(1) == {"soc": 5, "range": 20}


@patch("emulated_devices.__main__.asyncio.run")
def test_main_runs_server(run, capsys):
    main(["--port", "9100"])

    run.assert_called_once()
    run.call_args[0][0].close()
    out = capsys.readouterr().out
    assert "http://127.0.0.1:9100" in out
    assert VERSION_INFO in out
