""" A pytest plugin that provides the ``xml_assertions`` fixture. Its assertions don't
    interrupt a test when they fail, the test is failed with all reported failures
    after it returned.
"""

import pytest

from xmlassert import XmlAssertions
from xmlassert.reporters import RecordingReporter


reporter_key = pytest.StashKey[RecordingReporter]()


@pytest.fixture()
def xml_assertions(request) -> XmlAssertions:
    """ An :class:`xmlassert.XmlAssertions` instance whose failures fail the test. """
    reporter = RecordingReporter()
    request.node.stash[reporter_key] = reporter
    return XmlAssertions(reporter)


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item):
    result = yield
    reporter = item.stash.get(reporter_key, None)
    if reporter is not None and reporter.failures:
        pytest.fail('\n'.join(str(x) for x in reporter.failures), pytrace=False)
    return result
