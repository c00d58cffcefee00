import json
from pathlib import Path

import pytest
from openpyxl import load_workbook
from sqlalchemy import create_engine

from serial_list.cli import main, parse_record_num

from conftest import seed_databases


@pytest.fixture
def database_urls(tmp_path: Path) -> tuple[str, str]:
    orders_url = f"sqlite:///{(tmp_path / 'sierra.db').as_posix()}"
    holdings_url = f"sqlite:///{(tmp_path / 'holdings.db').as_posix()}"
    orders_engine = create_engine(orders_url)
    holdings_engine = create_engine(holdings_url)
    seed_databases(orders_engine, holdings_engine)
    orders_engine.dispose()
    holdings_engine.dispose()
    return orders_url, holdings_url


def report_args(urls: tuple[str, str], *extra: str) -> list[str]:
    return ["--database-url", urls[0], "report", "--holdings-url", urls[1], "--as-of", "2025-03-01", *extra]


def test_parse_record_num():
    assert parse_record_num("o1000001a") == 1000001
    assert parse_record_num("1000002") == 1000002


def test_report_to_spreadsheet(database_urls, tmp_path: Path):
    out = tmp_path / "serials.xlsx"
    assert main(report_args(database_urls, "--output", str(out))) == 0

    sheet = load_workbook(out)["Serial_orders"]
    rows = [tuple(cell.value for cell in row) for row in sheet.iter_rows()]
    assert rows[0][-5:] == ("FY2025", "FY2024", "FY2023", "FY2022", "FY2021")
    assert [row[0] for row in rows[1:]] == ["o1000001a", "o1000002a"]

    first = rows[1]
    assert first[1] == "Journal of Serials"
    assert first[2:4] == ("1234-567X", "1234-567X")
    assert first[4] == "1995-2010 | Print run\n2005- | ScienceDirect"
    assert first[6] == "mhist"
    assert first[9] is True
    assert first[10] == 100
    assert first[11] == 75.25
    assert first[12] is None

    second = rows[2]
    assert second[2:4] == ("2222-3333", None)
    assert second[4] is None
    assert second[9] is False
    assert second[10] == 30


def test_report_to_stdout(database_urls, capsys):
    assert main(report_args(database_urls, "--stdout")) == 0
    out = capsys.readouterr().out.strip().split("\n")
    assert out[0].startswith("order_number\ttitle\tissn1")
    assert out[1].startswith("o1000001a\tJournal of Serials\t1234-567X\t1234-567X\t")
    assert out[-1].startswith("o1000002a\tMonograph Series\t2222-3333\t\t\ts\tscont")


def test_failed_enrichment_keeps_previous_report(database_urls, tmp_path: Path, capsys):
    out = tmp_path / "serials.xlsx"
    out.write_bytes(b"previous")
    empty_holdings = f"sqlite:///{(tmp_path / 'empty.db').as_posix()}"
    args = ["--database-url", database_urls[0], "report", "--holdings-url", empty_holdings, "--output", str(out)]

    assert main(args) == 1
    assert "Report failed during enrichment" in capsys.readouterr().err
    assert out.read_bytes() == b"previous"


def test_unreachable_order_database(tmp_path: Path, capsys):
    missing = f"sqlite:///{(tmp_path / 'missing' / 'sierra.db').as_posix()}"
    assert main(["--database-url", missing, "report", "--stdout"]) == 1
    assert "Report failed during selection" in capsys.readouterr().err


def test_lookup(database_urls, capsys):
    assert main(["--database-url", database_urls[0], "lookup", "o1000001a", "1000002"]) == 0
    out = capsys.readouterr().out.strip().split("\n")
    assert out == [
        "Journal of Serials\t50.00\tmhist\ts\tc",
        "Monograph Series\t30.00\tscont\ts\ta",
    ]


def test_summary_reports_generation_time(database_urls, capsys):
    assert main(report_args(database_urls, "--stdout")) == 0
    err = capsys.readouterr().err
    assert "Generated: " in err
    assert "(as of 2025-03-01)" in err


def test_bad_sheet_name_fails_in_sink_stage(database_urls, tmp_path: Path, capsys):
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"sheet_name": "Potential serial orders by fund code"}))
    out = tmp_path / "serials.xlsx"
    args = ["--settings", str(settings_path), *report_args(database_urls, "--output", str(out))]

    assert main(args) == 1
    assert "Report failed during sink" in capsys.readouterr().err
    assert not out.exists()


def test_invalid_as_of_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["report", "--as-of", "2025-13-45", "--stdout"])
    assert excinfo.value.code == 2
    assert "--as-of" in capsys.readouterr().err


def test_invalid_record_number_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["lookup", "oXYZa"])
    assert excinfo.value.code == 2
    assert "oXYZa" in capsys.readouterr().err
