from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from lazyrefs.runtime.logging_setup import configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        package_logger = logging.getLogger("lazyrefs")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.setLevel(logging.NOTSET)
        package_logger.propagate = True

    def test_writes_records_at_or_above_level_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "session.log"

            returned = configure_logging("info", log_path)
            logging.getLogger("lazyrefs.ref_view.view").debug("hidden detail")
            logging.getLogger("lazyrefs.ref_view.view").info("Initialising RefView")
            for handler in logging.getLogger("lazyrefs").handlers:
                handler.flush()

            self.assertEqual(returned, log_path)
            text = log_path.read_text(encoding="utf-8")
            self.assertIn("INFO - lazyrefs.ref_view.view - Initialising RefView", text)
            self.assertNotIn("hidden detail", text)

    def test_reconfiguring_replaces_previous_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging("WARNING", Path(tmp) / "a.log")
            configure_logging("WARNING", Path(tmp) / "b.log")

            self.assertEqual(len(logging.getLogger("lazyrefs").handlers), 1)


if __name__ == "__main__":
    unittest.main()
