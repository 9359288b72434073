import logging

import pytest

from dropfour.config import GameOptions
from dropfour.debug import DebugLevel, debug
from dropfour.utils import Rules, RulesVariation, Token


def test_token_cycle():
    assert Token.RED.other() == Token.YELLOW
    assert Token.YELLOW.other() == Token.RED
    assert Token.EMPTY.other() == Token.EMPTY
    assert Token.RED.other().other() == Token.RED


def test_token_chars():
    assert Token.from_char('R') == Token.RED
    assert Token.from_char('Y') == Token.YELLOW
    assert Token.from_char('x') == Token.EMPTY
    assert [str(t) for t in Token] == [" ", "R", "Y"]
    assert not Token.EMPTY.is_valid()


def test_classic_rules():
    assert RulesVariation.CLASSIC.rules == Rules(columns=7, rows=6, connect_n=4)
    assert RulesVariation.CLASSIC.rules.cells == 42
    assert RulesVariation.from_name(" Classic ") is RulesVariation.CLASSIC
    with pytest.raises(ValueError):
        RulesVariation.from_name("giant")


def test_options_from_env(tmp_path):
    options = GameOptions.from_env({
        "DROPFOUR_RULES": "classic",
        "DROPFOUR_LOG_LEVEL": "debug",
        "DROPFOUR_SAVE_DIR": str(tmp_path),
    })
    assert options.rules is RulesVariation.CLASSIC
    assert options.log_level == "debug"
    assert options.save_dir == str(tmp_path)

    assert GameOptions.from_env({}) == GameOptions()


def test_options_reject_unknown_rules():
    with pytest.raises(ValueError):
        GameOptions.from_env({"DROPFOUR_RULES": "hex"})


def test_apply_logging_sets_level():
    GameOptions(log_level="trace").apply_logging()
    assert debug.level == DebugLevel.TRACE
    assert debug.logger.level == logging.DEBUG


def test_unknown_level_is_rejected():
    with pytest.raises(ValueError):
        debug.set_from_string("loud")


def test_component_filter():
    debug.configure(level=DebugLevel.DEBUG, components=["board"])
    assert debug.is_enabled_for(DebugLevel.DEBUG, "board")
    assert not debug.is_enabled_for(DebugLevel.DEBUG, "saves")
    assert not debug.is_enabled_for(DebugLevel.TRACE, "board")


def test_messages_reach_the_logger():
    records = []

    class Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Collect()
    debug.logger.addHandler(handler)
    try:
        debug.configure(level=DebugLevel.INFO)
        debug.info("hello", "game")
        debug.debug("hidden", "game")
    finally:
        debug.logger.removeHandler(handler)

    assert [r.getMessage() for r in records] == ["[game] hello"]


def test_log_file(tmp_path):
    log_path = tmp_path / "dropfour.log"
    debug.configure(level=DebugLevel.INFO, log_file=str(log_path))
    try:
        debug.warning("written", "cli")
    finally:
        debug.configure(log_file="")
    assert "[cli] written" in log_path.read_text()


def test_timer_reports_elapsed():
    debug.start_timer("t")
    assert debug.end_timer("t") >= 0
    assert debug.end_timer("t") is None
