from __future__ import annotations

from fontloader.logging import FontLoaderLogger
from fontloader.ui.cli.state import CLIState


def test_logger_outside_cli_prefixes_path(capsys):
    logger = FontLoaderLogger()
    assert logger.state is None
    logger.warning("Skipping metrics.", path="fonts/a.ttf")
    logger.error("Failed %d times.", 2)
    logger.debug("Not shown without verbosity.")
    captured = capsys.readouterr()
    assert captured.err == "fonts/a.ttf: Skipping metrics.\nFailed 2 times.\n"
    assert captured.out == ""


def test_logger_with_cli_state_renders_context(capsys):
    logger = FontLoaderLogger(CLIState(verbosity=1))
    assert logger.verbose
    logger.debug("Added as %s.", "truetype", path="fonts/a.ttf")
    logger.error("Error processing font file.", path="b.ttf", exception=OSError("disk gone"))
    captured = capsys.readouterr()
    assert "fonts/a.ttf: Added as truetype." in captured.out
    assert "error: b.ttf: Error processing font file." in captured.err
    assert "disk gone" in captured.err
