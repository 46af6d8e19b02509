from xmlassert import XmlAssertions
from xmlassert.reporters import Outcome, RecordingReporter


def run_is_xml(got, expected, options=None) -> Outcome:
    """ Runs the ``is_xml`` assertion and returns the single reported outcome. """
    reporter = RecordingReporter()
    result = XmlAssertions(reporter).is_xml(got, expected, options)
    assert len(reporter.outcomes) == 1
    outcome = reporter.last
    assert result is (True if outcome.passed else None)
    return outcome
