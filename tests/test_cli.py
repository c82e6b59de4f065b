"""
Tests for the main_filters command-line front end.
"""
import logging

import pytest

import main_filters
from imaging_filters.core.matrix import Matrix
from imaging_filters.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    pkg_logger = logging.getLogger("imaging_filters")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()


def test_text_input_to_text_output(tmp_path):
    src = tmp_path / "in.txt"
    src.write_text("0 63 64\n128 200 255")
    out = tmp_path / "out.txt"

    code = main_filters.main(["--input", str(src), "--filter", "quantization", "--levels", "4", "--output", str(out)])

    assert code == 0
    assert out.read_text() == "31 31 95\n159 223 223"


def test_explicit_shape_and_print(tmp_path, capsys):
    src = tmp_path / "in.txt"
    src.write_text("-5 300 7 8")

    code = main_filters.main(["--input", str(src), "--rows", "2", "--cols", "2", "--filter", "normalize", "--print"])

    assert code == 0
    assert "0 255\n7 8" in capsys.readouterr().out


def test_scene_with_preview(tmp_path):
    outdir = tmp_path / "outputs"

    code = main_filters.main(["--scene", "checker", "--size", "16", "--filter", "sobel", "--preview", "--outdir", str(outdir)])

    assert code == 0
    assert (outdir / "sobel_preview.png").exists()
    assert (outdir / "sobel.png").exists()


def test_run_once_returns_filtered_matrix():
    args = main_filters.parse_args(["--scene", "gradient", "--size", "8", "--filter", "quant", "--levels", "2"])
    result = main_filters.run_once(args)
    assert isinstance(result, Matrix)
    assert set(result) <= {63.0, 191.0}


@pytest.mark.parametrize("argv", [
    ["--filter", "quantization", "--levels", "0"],
    ["--filter", "median"],
])
def test_library_errors_exit_with_status_1(argv):
    assert main_filters.main(["--size", "8"] + argv) == 1


def test_missing_input_file_exits_with_status_1(tmp_path):
    assert main_filters.main(["--input", str(tmp_path / "missing.txt")]) == 1


def test_setup_logging_replaces_handlers(tmp_path):
    setup_logging()
    pkg_logger = setup_logging(verbose=True, log_file=tmp_path / "run.log")
    assert pkg_logger.name == "imaging_filters"
    assert pkg_logger.level == logging.DEBUG
    assert len(pkg_logger.handlers) == 2

    pkg_logger = setup_logging()
    assert pkg_logger.level == logging.INFO
    assert len(pkg_logger.handlers) == 1


def test_log_file_option(tmp_path):
    log_file = tmp_path / "run.log"

    code = main_filters.main(["--scene", "gradient", "--size", "8", "--filter", "blur", "--verbose", "--log-file", str(log_file)])

    assert code == 0
    text = log_file.read_text()
    assert "[INFO] imaging_filters.cli: Generating 'gradient' scene (8 px)" in text
    assert "[DEBUG] imaging_filters.filters.pipeline: apply_filter: blur" in text
