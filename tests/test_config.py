import os
import unittest
from unittest.mock import patch

from app.core.config import _get_env_bool, _get_env_float, _get_env_int, _get_env_list


class EnvHelperTests(unittest.TestCase):
    def test_int_reads_value_or_default(self):
        with patch.dict(os.environ, {"ATS_MIN_TEXT_CHARS": "32"}):
            self.assertEqual(_get_env_int("ATS_MIN_TEXT_CHARS", 20), 32)
        with patch.dict(os.environ, {"ATS_MIN_TEXT_CHARS": ""}):
            self.assertEqual(_get_env_int("ATS_MIN_TEXT_CHARS", 20), 20)

    def test_invalid_int_raises_runtime_error(self):
        with patch.dict(os.environ, {"MAX_UPLOAD_BYTES": "ten megabytes"}):
            with self.assertRaises(RuntimeError) as ctx:
                _get_env_int("MAX_UPLOAD_BYTES", 1024)
        self.assertIn("MAX_UPLOAD_BYTES", str(ctx.exception))

    def test_invalid_float_raises_runtime_error(self):
        with patch.dict(os.environ, {"RAZORPAY_TIMEOUT_S": "2.5"}):
            self.assertEqual(_get_env_float("RAZORPAY_TIMEOUT_S", 10.0), 2.5)
        with patch.dict(os.environ, {"RAZORPAY_TIMEOUT_S": "soon"}):
            with self.assertRaises(RuntimeError):
                _get_env_float("RAZORPAY_TIMEOUT_S", 10.0)

    def test_bool_and_list_parsing(self):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": "off", "CORS_ALLOWED_ORIGINS": " a.com, ,b.com "}):
            self.assertFalse(_get_env_bool("RATE_LIMIT_ENABLED", True))
            self.assertEqual(_get_env_list("CORS_ALLOWED_ORIGINS", []), ("a.com", "b.com"))


if __name__ == "__main__":
    unittest.main()
