from __future__ import annotations

from pathlib import Path

import pytest

from fontloader.core.config import FontFile, LocalFontOptions
from fontloader.fonts.decoder import decode_metrics, load_font
from fontloader.fonts.metrics import compute_fallback_metrics
from fontloader.loader import local_font, local_fonts, style_weight
from fontloader.targets import MemoryTarget


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, message: str, args: tuple, path: str | None) -> None:
        message = message % args if args else message
        self.records.append((level, f"{path}: {message}" if path else message))

    def info(self, message: str, *args, path=None) -> None:
        self._record("info", message, args, path)

    def debug(self, message: str, *args, path=None) -> None:
        self._record("debug", message, args, path)

    def warning(self, message: str, *args, path=None, exception=None) -> None:
        self._record("warning", message, args, path)

    def error(self, message: str, *args, path=None, exception=None) -> None:
        self._record("error", message, args, path)

    def levels(self, level: str) -> list[str]:
        return [message for record_level, message in self.records if record_level == level]


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def family(write_font) -> list[FontFile]:
    write_font("fonts/Demo-Regular.ttf", letter_width=500)
    write_font("fonts/Demo-Bold.ttf", letter_width=700)
    return [
        FontFile(path="fonts/Demo-Bold.ttf", weight="700"),
        FontFile(path="fonts/Demo-Regular.ttf", weight="400"),
    ]


def _options(tmp_path: Path, **kwargs) -> LocalFontOptions:
    kwargs.setdefault("output_dir", tmp_path)
    return LocalFontOptions(base_dir=tmp_path, **kwargs)


def test_faces_fallback_and_bindings(tmp_path, family, logger):
    target = MemoryTarget()
    output = local_font(_options(tmp_path, src=family), target=target, logger=logger)

    names = output.class_name.removeprefix("__className_")
    css = target.styles[f"__font_style_{names}"]
    assert css == output.css
    assert css.count("@font-face") == 3
    assert "src: url(fonts/Demo-Bold.ttf) format('truetype');" in css
    assert "src: url(fonts/Demo-Regular.ttf) format('truetype');" in css
    assert "font-weight: 700;" in css
    assert "font-display: swap;" in css
    assert f"font-family: '__font_Fallback_{names}';" in css
    assert "src: local('Arial');" in css
    stack = f"'__font_{names}', '__font_Fallback_{names}'"
    assert f".__className_{names} {{\n  font-family: {stack};" in css
    assert output.style.font_family == f"'__font_{names}', '__font_Fallback_{names}'"
    assert not logger.levels("error")


def test_fallback_is_measured_on_regular_face(tmp_path, family, logger):
    output = local_font(_options(tmp_path, src=family), target=MemoryTarget(), logger=logger)
    regular = load_font((tmp_path / "fonts/Demo-Regular.ttf").read_bytes())
    expected = compute_fallback_metrics(decode_metrics(regular), "sans-serif")
    assert output.fallback_metrics == expected
    assert f"size-adjust: {expected.size_adjust};" in output.css


def test_times_new_roman_uses_serif_reference(tmp_path, family, logger):
    options = _options(tmp_path, src=family, adjust_font_fallback="Times New Roman")
    output = local_font(options, target=MemoryTarget(), logger=logger)
    assert output.fallback_metrics is not None
    assert output.fallback_metrics.fallback_font == "Times New Roman"
    assert "src: local('Times New Roman');" in output.css


def test_disabled_fallback_keeps_class_binding(tmp_path, family, logger):
    options = _options(tmp_path, src=family, adjust_font_fallback=False, fallback=["system-ui"])
    output = local_font(options, target=MemoryTarget(), logger=logger)
    assert output.fallback_metrics is None
    assert "local(" not in output.css
    assert output.css.count("@font-face") == 2
    assert output.style.font_family.endswith(", system-ui")
    assert "__font_Fallback_" not in output.style.font_family


def test_missing_file_is_reported_and_skipped(tmp_path, write_font, logger):
    write_font("Present.ttf")
    src = [FontFile(path="Missing.ttf", weight="400"), FontFile(path="Present.ttf", weight="700")]
    output = local_font(_options(tmp_path, src=src), target=MemoryTarget(), logger=logger)
    assert output.css.count("url(") == 1
    assert "Present.ttf" in output.css
    assert any("Missing.ttf" in message for message in logger.levels("error"))
    # Only the remaining file can be measured.
    assert output.fallback_metrics is not None


def test_undecodable_file_has_face_but_no_fallback(tmp_path, logger):
    (tmp_path / "broken.woff2").write_bytes(b"wOF2 but not really")
    options = _options(tmp_path, src="broken.woff2")
    output = local_font(options, target=MemoryTarget(), logger=logger)
    assert "url(broken.woff2) format('woff2')" in output.css
    assert output.fallback_metrics is None
    assert "__font_Fallback_" not in output.css
    assert any("broken.woff2" in message for message in logger.levels("warning"))


def test_unmeasurable_font_gets_plain_local_fallback(tmp_path, write_font, logger):
    write_font("Partial.ttf", characters="abc ")
    output = local_font(_options(tmp_path, src="Partial.ttf"), target=MemoryTarget(), logger=logger)
    assert output.fallback_metrics is not None
    assert output.fallback_metrics.is_degenerate
    assert "src: local('Arial');" in output.css
    assert "size-adjust" not in output.css
    assert logger.levels("warning")


def test_font_dir_copies_files_and_rewrites_urls(tmp_path, write_font, logger):
    write_font("src/Demo.ttf")
    options = _options(
        tmp_path,
        src="src/Demo.ttf",
        output_dir=tmp_path / "public",
        font_dir=tmp_path / "public" / "fonts",
        preload=True,
    )
    output = local_font(options, target=MemoryTarget(), logger=logger)
    assert (tmp_path / "public" / "fonts" / "Demo.ttf").exists()
    assert "url(fonts/Demo.ttf) format('truetype')" in output.css
    assert output.preload == [
        '<link rel="preload" href="fonts/Demo.ttf" as="font" type="font/ttf" crossorigin>'
    ]


def test_urls_are_percent_encoded(tmp_path, write_font, logger):
    write_font("My Font (1).ttf")
    options = _options(tmp_path, src="My Font (1).ttf", preload=True)
    output = local_font(options, target=MemoryTarget(), logger=logger)
    assert "src: url(My%20Font%20%281%29.ttf) format('truetype');" in output.css
    assert 'href="My%20Font%20%281%29.ttf"' in output.preload[0]


def test_font_dir_rejects_clashing_file_names(tmp_path, write_font, logger):
    write_font("regular/Inter.ttf", letter_width=500)
    write_font("bold/Inter.ttf", letter_width=700)
    src = [
        FontFile(path="regular/Inter.ttf", weight="400"),
        FontFile(path="bold/Inter.ttf", weight="700"),
    ]
    options = _options(tmp_path, src=src, font_dir=tmp_path / "public")
    output = local_font(options, target=MemoryTarget(), logger=logger)

    public = tmp_path / "public"
    assert [path.name for path in public.iterdir()] == ["Inter.ttf"]
    assert (public / "Inter.ttf").read_bytes() == (tmp_path / "regular/Inter.ttf").read_bytes()
    assert output.css.count("url(public/Inter.ttf)") == 1
    assert "font-weight: 700;" not in output.css
    assert any("bold/Inter.ttf" in message for message in logger.levels("error"))


def test_font_dir_that_is_a_file_is_reported(tmp_path, write_font, logger):
    write_font("Demo.ttf")
    (tmp_path / "public").write_text("not a directory", encoding="utf-8")
    options = _options(tmp_path, src="Demo.ttf", font_dir=tmp_path / "public")
    output = local_font(options, target=MemoryTarget(), logger=logger)
    assert not output
    assert any("Demo.ttf" in message for message in logger.levels("error"))


def test_variable_and_declarations(tmp_path, write_font, logger):
    write_font("Demo.ttf")
    options = _options(
        tmp_path,
        src="Demo.ttf",
        weight="100 900",
        variable="--font-demo",
        declarations=[["unicode-range", "U+0000-00FF"]],
    )
    output = local_font(options, target=MemoryTarget(), logger=logger)
    assert output.variable == "--font-demo"
    assert output.variable_class is not None
    assert f".{output.variable_class} {{\n  --font-demo: " in output.css
    assert "unicode-range: U+0000-00FF;" in output.css
    assert "font-weight: 100 900;" in output.css
    assert output.style.font_weight == 100


def test_default_target_writes_output_css(tmp_path, write_font, logger):
    write_font("Demo.ttf")
    output = local_font(_options(tmp_path, src="Demo.ttf", output_css="fonts.css"), logger=logger)
    assert (tmp_path / "fonts.css").read_text(encoding="utf-8") == output.css


def test_append_to_existing_stylesheet(tmp_path, write_font, logger):
    write_font("Demo.ttf")
    sheet = tmp_path / "app.css"
    sheet.write_text("body { margin: 0; }\n", encoding="utf-8")
    options = _options(tmp_path, src="Demo.ttf", append_to=sheet)
    local_font(options, logger=logger)
    local_font(options, logger=logger)
    content = sheet.read_text(encoding="utf-8")
    assert content.startswith("body { margin: 0; }\n")
    assert content.count("/* font-loader:__font_style_") == 1
    assert not (tmp_path / "fonts.css").exists()


def test_nothing_to_do_when_every_file_fails(tmp_path, logger):
    output = local_font(_options(tmp_path, src="absent.ttf"), logger=logger)
    assert not output
    assert output.css == ""
    assert not (tmp_path / "fonts.css").exists()


def test_local_fonts_share_stylesheet(tmp_path, write_font, logger):
    write_font("Sans.ttf")
    write_font("Serif.ttf", letter_width=450)
    options = [
        _options(tmp_path, src="Sans.ttf"),
        _options(tmp_path, src="Serif.ttf", adjust_font_fallback="Times New Roman"),
    ]
    outputs = local_fonts(options, logger=logger)
    content = (tmp_path / "fonts.css").read_text(encoding="utf-8")
    for output in outputs:
        assert output.css in content
    assert outputs[0].class_name != outputs[1].class_name


@pytest.mark.parametrize(
    ("weight", "expected"),
    [(None, None), ("400", 400), ("bold", 700), ("normal", 400), ("100 900", 100), ("x", None)],
)
def test_style_weight(weight, expected):
    assert style_weight(weight) == expected
