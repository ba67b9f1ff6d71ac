import logging
import os
import tempfile

from common.config import TempFileSettings
from common.io import UTF8_BOM, copy_file, ensure_temp_root, new_named_temp
from common.logging import DEFAULT_FORMAT, get_logger


def test_ensure_temp_root_defaults_to_platform_directory():
    assert str(ensure_temp_root(TempFileSettings())) == tempfile.gettempdir()


def test_ensure_temp_root_creates_configured_directory(tmp_path):
    root = ensure_temp_root(TempFileSettings(directory=tmp_path / "a" / "b"))
    assert root.is_dir()


def test_new_named_temp_is_removed_on_close(tmp_path):
    handle = new_named_temp(TempFileSettings(directory=tmp_path, prefix="aio-"))
    assert os.path.basename(handle.name).startswith("aio-")
    assert os.path.exists(handle.name)
    handle.close()
    assert not os.path.exists(handle.name)


def test_copy_file(tmp_path):
    source = tmp_path / "source.bin"
    source.write_bytes(UTF8_BOM + b"data")
    copied = copy_file(source, tmp_path / "dest.bin")
    assert copied.read_bytes() == b"\xef\xbb\xbfdata"


def test_get_logger_installs_single_handler():
    logger = get_logger("temporary_file.test")
    get_logger("temporary_file.test")
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == DEFAULT_FORMAT
    assert logger.level == logging.INFO
