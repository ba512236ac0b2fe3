import logging

import pytest
from biofmt_core.cli_utils import (
    ARGUMENT_ERROR_EXIT_CODE,
    RUNTIME_ERROR_EXIT_CODE,
    ToolArgumentParser,
    positive_int,
    probability,
    run_tool,
)
from biofmt_core.logger import logger


def _parser():
    parser = ToolArgumentParser(prog="test-tool", description="test tool")
    parser.add_argument("-n", "--length", type=positive_int, required=True)
    return parser


class TestToolArgumentParser:
    def test_about(self, capsys):
        with pytest.raises(SystemExit) as e:
            _parser().parse_args(["--about"])
        assert e.value.code == 0
        assert capsys.readouterr().out.startswith("biofmt-utils")

    def test_help(self, capsys):
        with pytest.raises(SystemExit) as e:
            _parser().parse_args(["-h"])
        assert e.value.code == 0
        assert "--length" in capsys.readouterr().out

    def test_argument_error_exit_code(self, capsys):
        with pytest.raises(SystemExit) as e:
            _parser().parse_args([])
        assert e.value.code == ARGUMENT_ERROR_EXIT_CODE
        assert "usage: test-tool" in capsys.readouterr().err

    def test_invalid_type_is_argument_error(self):
        with pytest.raises(SystemExit) as e:
            _parser().parse_args(["-n", "0"])
        assert e.value.code == ARGUMENT_ERROR_EXIT_CODE

    def test_verbosity_sets_logger_level(self):
        _parser().parse_args(["-n", "1", "--verbosity", "DEBUG"])
        assert logger.level == logging.DEBUG
        _parser().parse_args(["-n", "1"])
        assert logger.level == logging.INFO


def test_probability():
    assert probability("0.25") == 0.25
    with pytest.raises(Exception):
        probability("1.5")


class TestRunTool:
    def test_runtime_error_exit_code(self):
        def run(argv):
            raise RuntimeError("boom")

        with pytest.raises(SystemExit) as e:
            run_tool(run, ["failing-tool"])
        assert e.value.code == RUNTIME_ERROR_EXIT_CODE

    def test_success(self, mocker):
        run = mocker.Mock()
        run_tool(run, ["tool", "-x"])
        run.assert_called_once_with(["tool", "-x"])
