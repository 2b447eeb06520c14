import logging

import pytest

from halfmesh.log import setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield

    logger = logging.getLogger('halfmesh')

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.NOTSET)


def test_setup_logging_levels(monkeypatch):
    monkeypatch.delenv('HALFMESH_DEBUG', raising=False)

    assert setup_logging(quiet=True).level == logging.INFO
    assert setup_logging(quiet=True, debug=True).level == logging.DEBUG


def test_debug_from_environment(monkeypatch):
    monkeypatch.setenv('HALFMESH_DEBUG', '1')
    assert setup_logging(quiet=True).level == logging.DEBUG

    monkeypatch.setenv('HALFMESH_DEBUG', '0')
    assert setup_logging(quiet=True).level == logging.INFO


def test_handlers_are_replaced():
    logger = setup_logging()
    assert len(logger.handlers) == 1

    logger = setup_logging()
    assert len(logger.handlers) == 1

    logger = setup_logging(quiet=True)
    assert not logger.handlers


def test_log_file(tmp_path, tetra):
    path = tmp_path / 'halfmesh.log'
    setup_logging(str(path), quiet=True, debug=True)

    tetra.triangulate_face([0.0, -0.5, 0.5], tetra.faces[1])

    for handler in logging.getLogger('halfmesh').handlers:
        handler.flush()

    text = path.read_text()
    assert 'DEBUG - triangulated Face(1)' in text


def test_records_propagate(caplog):
    setup_logging(quiet=True)

    with caplog.at_level(logging.INFO, logger='halfmesh'):
        logging.getLogger('halfmesh.hds').info('hello')

    assert 'hello' in caplog.text
