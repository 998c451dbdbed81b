import io
import logging
import math

import pytest

from qc_core.errors import TableFormatError
from qc_core.geometry import format_float
from qc_core.parsers.reflections import open_reference_table, read_reflections
from qc_core.session import RETRY_PROMPT, IndexingSession, SessionState, run_session
from qc_core.types import Reflection, StructureMode


def _reflection(*labels):
    return Reflection(labels=tuple(labels), values=tuple(float(x) for x in labels))


def test_crystal_scenario(ac_config, operator):
    out = io.StringIO()
    table = run_session(ac_config, open_reference_table(ac_config), stdin=operator("38.5", ""), stdout=out)

    assert len(table) == 1
    row = table.records[0].to_row()
    assert row[:4] == ["1", "0", "0", "38.5"]

    r = math.radians(38.5)
    i = math.cos(r) ** 2
    assert float(row[4]) == pytest.approx(i / math.sin(r) + i / r)
    assert float(row[5]) == pytest.approx(1.540593 * 1.0 / 2 / math.sin(r))
    assert row[5] == format_float(float(row[5]))


def test_prompt_shows_predicted_angle(ac_config, operator):
    out = io.StringIO()
    run_session(ac_config, open_reference_table(ac_config), stdin=operator("", ""), stdout=out)

    first = math.degrees(math.asin(1.540593 / 2 / 4.0))
    second = math.degrees(math.asin(1.540593 * math.sqrt(2) / 2 / 4.0))
    assert out.getvalue() == f"(1, 0, 0) ~{first:.2f}: (1, 1, 0) ~{second:.2f}: "


def test_blank_lines_record_nothing(ac_config, operator):
    session = IndexingSession(ac_config, open_reference_table(ac_config), stdin=operator("", ""), stdout=io.StringIO())
    table = session.run()
    assert len(table) == 0
    assert session.skipped == 2
    assert session.state is SessionState.DONE


def test_whitespace_only_line_is_blank(ac_config, operator):
    table = run_session(ac_config, open_reference_table(ac_config), stdin=operator("   ", "40"), stdout=io.StringIO())
    assert [r.labels for r in table.records] == [("1", "1", "0")]


def test_retry_keeps_same_reflection(ac_config, operator):
    out = io.StringIO()
    table = run_session(
        ac_config, open_reference_table(ac_config), stdin=operator("abc", "nan", "22.2", "31.8"), stdout=out
    )

    assert out.getvalue().count(RETRY_PROMPT) == 2
    assert [(r.labels, r.two_theta) for r in table.records] == [
        (("1", "0", "0"), "22.2"),
        (("1", "1", "0"), "31.8"),
    ]


def test_observed_text_kept_verbatim(ac_config, operator):
    table = run_session(ac_config, open_reference_table(ac_config), stdin=operator("38.50", ""), stdout=io.StringIO())
    assert table.records[0].two_theta == "38.50"


def test_end_of_input_keeps_recorded_rows(ac_config, operator):
    session = IndexingSession(
        ac_config, open_reference_table(ac_config), stdin=operator("38.5"), stdout=io.StringIO()
    )
    table = session.run()
    assert len(table) == 1
    assert session.state is SessionState.DONE


def test_empty_input_ends_session(ac_config):
    table = run_session(ac_config, open_reference_table(ac_config), stdin=io.StringIO(""), stdout=io.StringIO())
    assert len(table) == 0


def test_row_count_matches_numeric_answers(ac_config, operator):
    table = run_session(
        ac_config, open_reference_table(ac_config), stdin=operator("x", "", "y", "30"), stdout=io.StringIO()
    )
    assert len(table) == 1
    assert table.records[0].labels == ("1", "1", "0")


def test_quasicrystal_zero_reflection(qc_config, operator, caplog):
    out = io.StringIO()
    with caplog.at_level(logging.WARNING, logger="qc_core"):
        table = run_session(qc_config, open_reference_table(qc_config), stdin=operator("0", ""), stdout=out)

    assert out.getvalue().startswith("(0, 0, 0, 0, 0, 0) ~0.00: ")
    assert len(table) == 1
    record = table.records[0]
    assert record.two_theta == "0"
    assert record.nr is None
    assert record.lattice_constant is None
    assert "NR left empty" in caplog.text
    assert "NR not recorded:" in out.getvalue()
    assert "lattice constant not recorded:" in out.getvalue()


def test_unreachable_reflection_prompts_with_placeholder(ac_config, operator, caplog):
    reflections = [_reflection("9", "9", "9")]
    out = io.StringIO()
    with caplog.at_level(logging.WARNING, logger="qc_core"):
        run_session(ac_config, reflections, stdin=operator(""), stdout=out)
    assert out.getvalue() == "(9, 9, 9) ~?: "
    assert "no predicted angle" in caplog.text


def test_header_arity_matches_rows(qc_config, operator):
    table = run_session(qc_config, open_reference_table(qc_config), stdin=operator("0", "20"), stdout=io.StringIO())
    for row in table.rows():
        assert len(row) == len(table.header) == 9


def test_table_error_aborts(tmp_path, ac_config, operator):
    path = tmp_path / "bad.csv"
    path.write_text("1,0,0\n1,0\n")
    with pytest.raises(TableFormatError):
        run_session(ac_config, read_reflections(path, StructureMode.AC), stdin=operator("", ""), stdout=io.StringIO())


def test_wrong_arity_reflection(ac_config, operator):
    with pytest.raises(ValueError):
        run_session(ac_config, [_reflection("1", "0")], stdin=operator(""), stdout=io.StringIO())
