import logging
import os
import unittest
from unittest import mock

import numpy as np

from src.tapegrad.infrastructure._config import (
    ENV_DEFAULT_DTYPE,
    ENV_LOG_LEVEL,
    Settings,
    get_settings,
    reload_settings,
)
from src.tapegrad.infrastructure._logging import PACKAGE_LOGGER, configure_logging
from src.tapegrad.infrastructure.tensor._tensor import Tensor


class TestSettings(unittest.TestCase):
    def tearDown(self) -> None:
        # Re-read with the environment restored by mock.patch.dict.
        reload_settings()

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(ENV_DEFAULT_DTYPE, None)
            os.environ.pop(ENV_LOG_LEVEL, None)
            s = reload_settings()
        self.assertEqual(s, Settings())
        self.assertEqual(s.default_dtype, np.float32)
        self.assertEqual(s.log_level, "WARNING")

    def test_settings_are_cached(self):
        self.assertIs(get_settings(), get_settings())

    def test_default_dtype_from_environment(self):
        with mock.patch.dict(os.environ, {ENV_DEFAULT_DTYPE: "float64"}):
            s = reload_settings()
            self.assertEqual(s.default_dtype, np.float64)
            self.assertEqual(Tensor([1.0]).dtype, np.float64)
            # Explicit dtype still wins.
            self.assertEqual(Tensor([1.0], dtype=np.float32).dtype, np.float32)

    def test_log_level_is_upper_cased(self):
        with mock.patch.dict(os.environ, {ENV_LOG_LEVEL: "debug"}):
            self.assertEqual(reload_settings().log_level, "DEBUG")

    def test_non_float_dtype_rejected(self):
        with mock.patch.dict(os.environ, {ENV_DEFAULT_DTYPE: "int32"}):
            with self.assertRaises(ValueError):
                reload_settings()

    def test_unknown_dtype_rejected(self):
        with mock.patch.dict(os.environ, {ENV_DEFAULT_DTYPE: "not-a-dtype"}):
            with self.assertRaises(ValueError):
                reload_settings()


class TestLogging(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger(PACKAGE_LOGGER)
        self.previous_level = self.logger.level

    def tearDown(self) -> None:
        self.logger.setLevel(self.previous_level)

    def test_package_logger_name(self):
        self.assertTrue(PACKAGE_LOGGER.endswith("tapegrad"))

    def test_configure_logging_explicit_level(self):
        logger = configure_logging("DEBUG")
        self.assertIs(logger, self.logger)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_configure_logging_uses_settings(self):
        with mock.patch.dict(os.environ, {ENV_LOG_LEVEL: "error"}):
            reload_settings()
            logger = configure_logging()
        reload_settings()
        self.assertEqual(logger.level, logging.ERROR)

    def test_backward_replay_is_logged(self):
        configure_logging(logging.DEBUG)
        with self.assertLogs(PACKAGE_LOGGER, level="DEBUG") as cm:
            Tensor([1.0, 2.0]).trace().exp().sum().backward()
        self.assertTrue(any("replaying 2 backward operations" in m for m in cm.output))

    def test_tape_merge_is_logged(self):
        configure_logging(logging.DEBUG)
        a = Tensor([1.0]).trace().exp()
        b = Tensor([2.0]).trace().exp()
        with self.assertLogs(PACKAGE_LOGGER, level="DEBUG") as cm:
            a + b
        self.assertTrue(any("merging tapes" in m for m in cm.output))


if __name__ == "__main__":
    unittest.main()
