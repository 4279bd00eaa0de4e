from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ujust_picker.logging_setup import LOG_ENV_VAR, setup_logging


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger("ujust_picker")
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

    def test_without_target_only_null_handler_is_installed(self) -> None:
        with mock.patch.dict("ujust_picker.logging_setup.os.environ", {}, clear=True):
            logger = setup_logging()

        self.assertEqual([type(handler) for handler in logger.handlers], [logging.NullHandler])
        self.assertFalse(logger.propagate)

    def test_env_var_routes_records_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "picker.log"
            with mock.patch.dict("ujust_picker.logging_setup.os.environ", {LOG_ENV_VAR: str(path)}):
                logger = setup_logging()
            logging.getLogger("ujust_picker.catalog").info("loaded %d files", 3)
            for handler in logger.handlers:
                handler.flush()

            text = path.read_text(encoding="utf-8")
            self.tearDown()

        self.assertIn("ujust_picker.catalog - INFO - loaded 3 files", text)

    def test_repeated_setup_does_not_stack_handlers(self) -> None:
        setup_logging("")
        logger = setup_logging("")

        self.assertEqual(len(logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
