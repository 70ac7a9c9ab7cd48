import json
import logging
import os
import tempfile
import unittest

import pygame

from main import main
from utils import load_config, resolve_path, setting, setup_logging

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SHIPPED_CONFIG = os.path.join(PROJECT_DIR, "config.json")


def _reset_logging():
    logger = logging.getLogger()
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class UtilsTest(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        _reset_logging()
        self.tmp.cleanup()

    def test_load_config(self):
        path = os.path.join(self.tmp.name, "config.json")
        with open(path, "w") as f:
            json.dump({"effect": {"gap": 2}}, f)
        self.assertEqual({"effect": {"gap": 2}}, load_config(path))

    def test_load_config_errors(self):
        with self.assertRaises(FileNotFoundError):
            load_config(os.path.join(self.tmp.name, "missing.json"))
        path = os.path.join(self.tmp.name, "broken.json")
        with open(path, "w") as f:
            f.write("{")
        with self.assertRaises(json.JSONDecodeError):
            load_config(path)

    def test_load_config_needs_an_object(self):
        path = os.path.join(self.tmp.name, "list.json")
        with open(path, "w") as f:
            json.dump([1, 2], f)
        with self.assertRaises(ValueError):
            load_config(path)

    def test_setting_treats_null_as_missing(self):
        section = {"fps": None, "width": 0}
        self.assertEqual(60, setting(section, "fps", 60))
        self.assertEqual(0, setting(section, "width", 800))
        self.assertEqual("x", setting(section, "path", "x"))

    def test_resolve_path(self):
        config_path = os.path.join(self.tmp.name, "config.json")
        self.assertEqual(os.path.join(self.tmp.name, "a.png"), resolve_path(config_path, "a.png"))
        absolute = os.path.abspath("/images/a.png")
        self.assertEqual(absolute, resolve_path(config_path, absolute))

    def test_setup_logging_writes_file(self):
        log_file = os.path.join(self.tmp.name, "logs", "portrait.log")
        self.assertEqual(log_file, setup_logging({"logging": {"level": "debug", "log_file": log_file}}))
        logging.info("hello portrait")
        for handler in logging.getLogger().handlers:
            handler.flush()
        with open(log_file) as f:
            self.assertIn("hello portrait", f.read())


class MainTest(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        _reset_logging()
        self.tmp.cleanup()

    def write_config(self, **sections):
        config = {
            "logging": {"level": "INFO", "log_file": os.path.join(self.tmp.name, "portrait.log")},
            "visualization": {"width": 40, "height": 20},
        }
        config.update(sections)
        path = os.path.join(self.tmp.name, "config.json")
        with open(path, "w") as f:
            json.dump(config, f)
        return path

    def test_missing_config(self):
        self.assertEqual(1, main(os.path.join(self.tmp.name, "missing.json")))

    def test_missing_image_aborts_setup(self):
        path = self.write_config(image={"path": "missing.png"})
        self.assertEqual(1, main(path))

    def test_invalid_effect_aborts_setup(self):
        path = self.write_config(effect={"ease": 3})
        self.assertEqual(1, main(path))

    def test_null_settings_use_defaults(self):
        image = resolve_path(SHIPPED_CONFIG, load_config(SHIPPED_CONFIG)["image"]["path"])
        path = self.write_config(
            image={"path": image},
            effect={"gap": None, "ease": None, "image_scale": 0.25},
            run_control={"max_steps": 2, "fps": None, "log_throttle_steps": None},
        )
        self.assertEqual(0, main(path))

    def test_runs_shipped_config(self):
        config = load_config(SHIPPED_CONFIG)
        config["image"]["path"] = resolve_path(SHIPPED_CONFIG, config["image"]["path"])
        config["logging"]["log_file"] = os.path.join(self.tmp.name, "portrait.log")
        config["run_control"]["max_steps"] = 2
        path = os.path.join(self.tmp.name, "config.json")
        with open(path, "w") as f:
            json.dump(config, f)
        self.assertEqual(0, main(path))

    def test_shipped_image_loads(self):
        config = load_config(SHIPPED_CONFIG)
        image = pygame.image.load(resolve_path(SHIPPED_CONFIG, config["image"]["path"]))
        self.assertEqual((160, 120), image.get_size())

    def test_runs_bounded_number_of_frames(self):
        image = pygame.Surface((10, 10))
        image.fill((0, 200, 0))
        pygame.image.save(image, os.path.join(self.tmp.name, "portrait.bmp"))
        path = self.write_config(
            image={"path": "portrait.bmp"},
            effect={"gap": 2},
            run_control={"max_steps": 3, "fps": 1000, "log_throttle_steps": 1},
        )
        self.assertEqual(0, main(path))


if __name__ == '__main__':
    unittest.main()
