import contextlib
from datetime import date

from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from registrar.term_ui import Terminal
from registrar.validation import STUDENT_ID_RE


@contextlib.contextmanager
def pipe_terminal(today: date | None = None):
    with create_pipe_input() as pipe:
        sess = PromptSession(input=pipe, output=DummyOutput())
        yield pipe, Terminal(sess, today=today)


def test_pattern_returns_trimmed_match():
    with pipe_terminal() as (pipe, term):
        pipe.send_text("  SE123456  \r")
        assert term.prompt_pattern("student ID", STUDENT_ID_RE) == "SE123456"


def test_invalid_input_keeps_prompting_until_valid():
    with pipe_terminal() as (pipe, term):
        # Rejected entry stays in the buffer; Ctrl-A, Ctrl-K clears it.
        pipe.send_text("SE12\r")
        pipe.send_text("\x01\x0bSE123456\r")
        assert term.prompt_pattern("student ID", STUDENT_ID_RE) == "SE123456"


def test_choice_out_of_range_then_valid():
    with pipe_terminal() as (pipe, term):
        pipe.send_text("10\r\x01\x0b3\r")
        assert term.prompt_choice("menu choice", 1, 9) == 3


def test_name_and_positive_int():
    with pipe_terminal() as (pipe, term):
        pipe.send_text("nguyen an\r\x01\x0bNguyen An\r")
        assert term.prompt_name(2, 20) == "Nguyen An"
    with pipe_terminal() as (pipe, term):
        pipe.send_text("0\r\x01\x0b4\r")
        assert term.prompt_positive_int("number of the table") == 4


def test_future_date_uses_fixed_today():
    with pipe_terminal(today=date(2026, 10, 18)) as (pipe, term):
        pipe.send_text("18/10/2026\r\x01\x0b19/10/2026\r")
        assert term.prompt_future_date("event") == "19/10/2026"


def test_confirm_then_pause_accepts_empty_enter():
    with pipe_terminal() as (pipe, term):
        pipe.send_text("maybe\r\x01\x0bn\r")
        assert term.prompt_confirm("delete student") is False
        pipe.send_text("\r")
        term.pause()
