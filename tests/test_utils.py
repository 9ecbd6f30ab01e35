import json
import logging

import numpy as np
import pytest
import torch

from reviewvec.src.utils import set_seed, setup_logging, save_json, load_json, create_dir
from reviewvec.src.utils.config import Config, config


def test_set_seed_is_reproducible():
    set_seed(123)
    first = np.random.rand(3)
    set_seed(123)
    second = np.random.rand(3)

    np.testing.assert_array_equal(first, second)


def test_json_roundtrip(tmp_path):
    path = tmp_path / 'nested' / 'data.json'
    save_json({"loss": [0.5, 0.25]}, str(path))

    assert load_json(str(path)) == {"loss": [0.5, 0.25]}


def test_save_json_converts_numpy_values(tmp_path):
    path = tmp_path / "metrics.json"
    save_json({"accuracy": np.float32(0.5), "counts": np.array([1, 2])}, path)

    assert load_json(path) == {"accuracy": 0.5, "counts": [1, 2]}


def test_set_seed_can_leave_cudnn_nondeterministic():
    set_seed(1, deterministic=False)
    assert torch.backends.cudnn.benchmark is True

    set_seed(1)
    assert torch.backends.cudnn.deterministic is True
    assert torch.backends.cudnn.benchmark is False


def test_create_dir(tmp_path):
    target = tmp_path / 'a' / 'b'
    create_dir(target)
    create_dir(target)

    assert target.is_dir()


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / 'logs' / 'run.log'
    logger = setup_logging(log_file=str(log_file), level=logging.DEBUG)

    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()

    assert logger.name == 'reviewvec'
    assert "hello" in log_file.read_text()

    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def fresh_config(monkeypatch, tmp_path):
    monkeypatch.setenv("REVIEWVEC_CONFIG", str(tmp_path / 'config.json'))
    yield config
    monkeypatch.undo()
    config.reload()


def test_config_is_singleton():
    assert Config() is config


def test_config_defaults(fresh_config):
    fresh_config.reload()

    assert fresh_config.get("vocabulary_size") == 10000
    assert fresh_config.get("training.batch_size") == 512
    assert fresh_config.get("training.missing", "fallback") == "fallback"


def test_config_env_override(fresh_config, monkeypatch):
    monkeypatch.setenv("REVIEWVEC_VOCAB_SIZE", "5000")
    monkeypatch.setenv("REVIEWVEC_IMDB_PATH", "/data/reviews.npz")
    fresh_config.reload()

    assert fresh_config.get("vocabulary_size") == 5000
    assert fresh_config.get("data.imdb_path") == "/data/reviews.npz"


def test_config_file_merge(fresh_config, tmp_path):
    (tmp_path / 'config.json').write_text(json.dumps({"training": {"epochs": 4}}))
    fresh_config.reload()

    assert fresh_config.get("training.epochs") == 4
    assert fresh_config.get("training.batch_size") == 512


def test_config_bad_file_keeps_defaults(fresh_config, tmp_path):
    (tmp_path / 'config.json').write_text("{not json")
    fresh_config.reload()

    assert fresh_config.get("training.epochs") == 20


def test_config_set_and_save(fresh_config, tmp_path):
    fresh_config.reload()
    fresh_config.set("training.optimizer", "adam")
    fresh_config.set("extra.flag", True)

    path = tmp_path / 'saved' / 'config.json'
    assert fresh_config.save_to_file(str(path))

    saved = json.loads(path.read_text())
    assert saved["training"]["optimizer"] == "adam"
    assert saved["extra"]["flag"] is True
    assert Config._defaults["training"]["optimizer"] == "rmsprop"
