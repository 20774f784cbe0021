"""Tests for the command line entry point."""

import pytest
from chipvm.cli import build_parser, main


def write_rom(path, instructions):
    path.write_bytes(b"".join(word.to_bytes(2, "big") for word in instructions))
    return str(path)


@pytest.fixture
def draw_rom(tmp_path):
    return write_rom(tmp_path / "draw.ch8", [0x600A, 0x6105, 0xA050, 0xD015, 0x1208])


def test_parser_defaults():
    args = build_parser().parse_args(["game.ch8"])
    assert args.interface == "terminal"
    assert args.overrides == []
    assert args.frames is None


def test_headless_screenshot(draw_rom, tmp_path):
    screenshot = tmp_path / "shot.png"
    code = main([draw_rom, "--interface", "headless", "--frames", "3",
                 "--screenshot", str(screenshot), "--log-level", "error"])
    assert code == 0
    assert screenshot.exists()


def test_screenshot_implies_headless(draw_rom, tmp_path):
    screenshot = tmp_path / "shot.png"
    code = main([draw_rom, "--frames", "2", "--screenshot", str(screenshot),
                 "--set", "scale=2", "--log-level", "error"])
    assert code == 0
    assert screenshot.exists()


def test_missing_rom(tmp_path):
    assert main([str(tmp_path / "missing.ch8"), "--interface", "headless"]) == 1


def test_fault_exit_code(tmp_path):
    rom = write_rom(tmp_path / "bad.ch8", [0x00EE])
    assert main([rom, "--interface", "headless", "--frames", "2", "--log-level", "critical"]) == 1


def test_fault_ignored_when_not_halting(tmp_path):
    rom = write_rom(tmp_path / "bad.ch8", [0x00EE, 0x1202])
    code = main([rom, "--interface", "headless", "--frames", "2",
                 "--set", "halt_on_fault=false", "--log-level", "critical"])
    assert code == 0


@pytest.mark.parametrize("extra", [["--set", "bogus=1"], ["--frames", "0"], ["--log-level", "loud"]])
def test_usage_errors(draw_rom, extra):
    assert main([draw_rom, "--interface", "headless"] + extra) == 2


def test_malformed_config_file(draw_rom, tmp_path):
    config = tmp_path / "broken.yaml"
    config.write_text("fps: [60\nscale: 4\n")
    assert main([draw_rom, "--interface", "headless", "--config", str(config)]) == 2
