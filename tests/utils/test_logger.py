import logging

import pytest

from appforge.utils import parse_module_levels, setup_logger
from appforge.utils.logger import _normalize_module_name


@pytest.fixture(autouse=True)
def restore_levels():
    yield
    for name in ("appforge.helper.vagrant", "appforge.helper.packer"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestModuleLevels:

    def test_parse_skips_malformed_pairs(self):
        assert parse_module_levels("go=debug, bad ,cache=INFO,") == {"go": "DEBUG", "cache": "INFO"}
        assert parse_module_levels("") is None

    @pytest.mark.parametrize("name, expected", [
        ("go", "appforge.bases.apps.go"),
        ("cc", "appforge.app.cache"),
        ("helper.vagrant", "appforge.helper.vagrant"),
        ("core.*", "appforge.core"),
        ("appforge.ui", "appforge.ui"),
        ("urllib3", "urllib3"),
    ])
    def test_normalize(self, name, expected):
        assert _normalize_module_name(name) == expected

    def test_levels_applied(self):
        setup_logger(module_levels={"vagrant": "WARNING"})
        assert logging.getLogger("appforge.helper.vagrant").level == logging.WARNING

    def test_levels_from_env(self, monkeypatch):
        monkeypatch.setenv("APPFORGE_LOG_LEVELS", "packer=ERROR")
        setup_logger()
        assert logging.getLogger("appforge.helper.packer").level == logging.ERROR
