from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from pdf_outline import OutlineDocument
from pdf_outline.cli import cli


def _write_outline(path: Path, items: list[dict[str, Any]]) -> Path:
    path.write_text(json.dumps({"version": 1, "items": items}), encoding="utf-8")
    return path


def test_apply_then_extract(sample_pdf: Path, tmp_path: Path, scenario_items: list[dict[str, Any]]) -> None:
    runner = CliRunner()
    outline = _write_outline(tmp_path / "outline.json", scenario_items)
    output = tmp_path / "outlined.pdf"

    result = runner.invoke(cli, ["apply", str(sample_pdf), str(outline), "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.exists()

    result = runner.invoke(cli, ["extract", str(output)])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [(item["title"], item["pageIndex"], item["level"]) for item in payload["items"]] == [
        ("Cover", 0, 0),
        ("Introduction", 2, 0),
        ("Goals", 3, 1),
        ("Appendix", 10, 0),
    ]


def test_apply_default_output_and_page_mode(sample_pdf: Path, tmp_path: Path) -> None:
    runner = CliRunner()
    outline = tmp_path / "outline.txt"
    outline.write_text("Start\t1\n\tDetails\t2\n", encoding="utf-8")

    result = runner.invoke(
        cli,
        ["apply", str(sample_pdf), str(outline), "--page-mode", "UseOutlines", "--fit", "fit"],
    )

    assert result.exit_code == 0, result.output
    output = sample_pdf.with_name("sample_outlined.pdf")
    document = OutlineDocument.open(output)
    assert [(item.title, item.level) for item in document.read_outline()] == [("Start", 0), ("Details", 1)]
    catalog = document.document.writer.root_object
    assert catalog["/PageMode"] == "/UseOutlines"


def test_apply_strict_rejects_level_skips(sample_pdf: Path, tmp_path: Path) -> None:
    runner = CliRunner()
    outline = _write_outline(tmp_path / "outline.json", [{"title": "A"}, {"title": "B", "level": 2}])

    result = runner.invoke(cli, ["apply", str(sample_pdf), str(outline), "--strict", "-o", str(tmp_path / "x.pdf")])

    assert result.exit_code == 1
    assert "Error" in result.output
    assert not (tmp_path / "x.pdf").exists()


def test_extract_to_text_file(sample_pdf: Path, tmp_path: Path) -> None:
    runner = CliRunner()
    document = OutlineDocument.open(sample_pdf)
    document.write_outline([{"title": "One", "pageIndex": 0}, {"title": "Two", "pageIndex": 4, "level": 1}])
    document.save()
    target = tmp_path / "toc.txt"

    result = runner.invoke(cli, ["extract", str(sample_pdf), "-o", str(target)])

    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8") == "One\t1\n\tTwo\t5\n"


def test_show_and_info(sample_pdf: Path, tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["show", str(sample_pdf)])
    assert result.exit_code == 0, result.output
    assert "no outline" in result.output

    document = OutlineDocument.open(sample_pdf)
    document.write_outline([{"title": "Chapter [1]", "pageIndex": 2}, {"title": "Part", "level": 1}])
    document.save()

    result = runner.invoke(cli, ["show", str(sample_pdf)])
    assert result.exit_code == 0, result.output
    assert "Chapter [1]" in result.output
    assert "page 3" in result.output

    result = runner.invoke(cli, ["info", str(sample_pdf)])
    assert result.exit_code == 0, result.output
    assert "Entries" in result.output
    assert "Yes" in result.output


def test_invalid_pdf_reports_error(tmp_path: Path) -> None:
    runner = CliRunner()
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"not a pdf at all")

    result = runner.invoke(cli, ["info", str(broken)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_verbose_flag_and_version() -> None:
    runner = CliRunner()

    assert runner.invoke(cli, ["--version"]).exit_code == 0
    result = runner.invoke(cli, ["--verbose", "--help"])
    assert result.exit_code == 0
    assert "apply" in result.output
