"""SimulatorControl mit gemocktem requests/subprocess."""

import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest
import requests

from emulated_devices.control import SimulatorControl, SimulatorError


def make_process(running=True):
    process = MagicMock()
    process.poll.return_value = None if running else 1
    process.returncode = None if running else 1
    return process


def test_url_and_command():
    control = SimulatorControl(host="127.0.0.1", port=9000, state_file="state.json")
    assert control.url == "http://127.0.0.1:9000"
    assert control.command() == [
        sys.executable, "-m", "emulated_devices",
        "--host", "127.0.0.1", "--port", "9000",
        "--state", "state.json",
    ]


@patch("emulated_devices.control.requests")
@patch("emulated_devices.control.subprocess.Popen")
def test_start_waits_until_ready(popen, mock_requests):
    mock_requests.exceptions = requests.exceptions
    popen.return_value = make_process()
    ok = MagicMock()
    mock_requests.get.side_effect = [requests.exceptions.ConnectionError("down"), ok]

    control = SimulatorControl(port=9001)
    with patch("emulated_devices.control.time.sleep"):
        control.start()

    assert mock_requests.get.call_count == 2
    ok.raise_for_status.assert_called_once()


@patch("emulated_devices.control.subprocess.Popen")
def test_start_fails_when_process_exits(popen):
    popen.return_value = make_process(running=False)
    with pytest.raises(SimulatorError):
        SimulatorControl(port=9002).start()


@patch("emulated_devices.control.requests")
@patch("emulated_devices.control.subprocess.Popen")
def test_start_times_out(popen, mock_requests):
    mock_requests.exceptions = requests.exceptions
    process = make_process()
    popen.return_value = process
    mock_requests.get.side_effect = requests.exceptions.ConnectionError("down")

    with patch("emulated_devices.control.time.sleep"):
        with pytest.raises(SimulatorError):
            SimulatorControl(port=9003).start(timeout=0.05)

    process.kill.assert_called_once()


@patch("emulated_devices.control.requests")
def test_apply_and_state(mock_requests):
    mock_requests.get.return_value.json.return_value = {"site": {}}
    control = SimulatorControl(port=9004)

    control.apply({"site": {}})
    assert control.state() == {"site": {}}

    args, kwargs = mock_requests.post.call_args
    assert args[0] == "http://127.0.0.1:9004/api/state"
    assert kwargs["json"] == {"site": {}}


@patch("emulated_devices.control.requests")
def test_stop_tolerates_dropped_connection(mock_requests):
    mock_requests.exceptions = requests.exceptions
    mock_requests.post.side_effect = requests.exceptions.ConnectionError("reset")
    control = SimulatorControl(port=9005)
    process = make_process()
    control._process = process

    control.stop()

    process.wait.assert_called_once()
    assert control._process is None


@patch("emulated_devices.control.requests")
def test_stop_kills_hanging_process(mock_requests):
    process = make_process()
    process.wait.side_effect = [subprocess.TimeoutExpired("sim", 1), 0]
    control = SimulatorControl(port=9006)
    control._process = process

    control.stop(timeout=1)

    process.kill.assert_called_once()
