import logging
import unittest

from lambdacraft import combinators, config, examples, sequence
from lambdacraft.combinators import fold
from lambdacraft.config import DEFAULT_MAX_STEPS, Settings, configure, get_logger, setup_logging
from lambdacraft.error import InvalidArgument


class SettingsTestCase(unittest.TestCase):

    def test_defaults(self):
        settings = Settings()
        self.assertEqual(DEFAULT_MAX_STEPS, settings.max_steps)
        self.assertEqual("WARNING", settings.log_level)

    def test_init(self):
        should_raise = [{"max_steps": 0}, {"max_steps": -5}, {"max_steps": "10"}, {"log_level": "LOUD"},
                        {"max_steps": []}, {"max_steps": ()}, {"max_steps": (2,)}, {"log_level": ("INFO",)}]
        for case in should_raise:
            self.assertRaises(InvalidArgument, Settings, **case)

        self.assertIsNone(Settings(max_steps=None).max_steps)
        self.assertEqual("DEBUG", Settings(log_level="debug").log_level)

    def test_from_env(self):
        should_raise = [{"LAMBDACRAFT_MAX_STEPS": "lots"}, {"LAMBDACRAFT_MAX_STEPS": "-3"},
                        {"LAMBDACRAFT_LOG_LEVEL": "chatty"}]
        for case in should_raise:
            self.assertRaises(InvalidArgument, Settings.from_env, case)

        cases = [
            ({}, (DEFAULT_MAX_STEPS, "WARNING")),
            ({"LAMBDACRAFT_MAX_STEPS": "250"}, (250, "WARNING")),
            ({"LAMBDACRAFT_MAX_STEPS": "0"}, (None, "WARNING")),
            ({"LAMBDACRAFT_MAX_STEPS": " None "}, (None, "WARNING")),
            ({"LAMBDACRAFT_LOG_LEVEL": "info"}, (DEFAULT_MAX_STEPS, "INFO")),
        ]
        for environ, (max_steps, log_level) in cases:
            settings = Settings.from_env(environ)
            self.assertEqual(max_steps, settings.max_steps, environ)
            self.assertEqual(log_level, settings.log_level, environ)


class ConfigureTestCase(unittest.TestCase):

    def setUp(self):
        self.previous = {"max_steps": config.settings.max_steps, "log_level": config.settings.log_level}

    def tearDown(self):
        configure(**self.previous)

    def test_configure(self):
        previous = configure(max_steps=42)
        self.assertEqual({"max_steps": self.previous["max_steps"]}, previous)
        self.assertEqual(42, config.settings.max_steps)

        configure(max_steps=None, log_level="error")
        self.assertIsNone(config.settings.max_steps)
        self.assertEqual("ERROR", config.settings.log_level)

    def test_rejects(self):
        should_raise = [{"max_steps": 0}, {"log_level": 3}, {"colour": "red"}, {"max_steps": ()}, {"max_steps": []}]
        for case in should_raise:
            self.assertRaises(InvalidArgument, configure, **case)
        self.assertEqual(self.previous["max_steps"], config.settings.max_steps)


class LoggingTestCase(unittest.TestCase):

    def test_get_logger(self):
        self.assertIs(logging.getLogger("lambdacraft.combinators"), get_logger("lambdacraft.combinators"))

    def test_module_loggers(self):
        for module in [combinators, examples, sequence]:
            self.assertIs(get_logger(module.__name__), module.logger, module.__name__)

    def test_setup_logging(self):
        self.assertRaises(InvalidArgument, setup_logging, "verbose")

    def test_combinators_log(self):
        with self.assertLogs("lambdacraft.combinators", level="DEBUG") as logs:
            fold([1, 2], lambda acc, value: acc + value, 0)
        self.assertEqual(["DEBUG:lambdacraft.combinators:fold: 2 element(s)"], logs.output)


if __name__ == '__main__':
    unittest.main()
