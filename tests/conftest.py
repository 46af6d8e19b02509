import logging
import sys

from pytest import fixture

from xmlassert import logger
from xmlassert.reporters import RecordingReporter


pytest_plugins = ['pytester']

stdout_handler = logging.StreamHandler(sys.stdout)


@fixture()
def debug_logging():
    level = logger.level
    stdout_handler.setLevel(logging.DEBUG)
    logger.addHandler(stdout_handler)
    logger.setLevel(logging.DEBUG)
    yield
    logger.removeHandler(stdout_handler)
    logger.setLevel(level)


@fixture()
def reporter():
    return RecordingReporter()

