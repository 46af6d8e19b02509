from io import StringIO

from xmlassert.reporters import Outcome, RecordingReporter, TAPReporter


def test_recording_reporter():
    reporter = RecordingReporter()
    assert reporter.last is None
    reporter.report(Outcome(True, 'one'))
    reporter.report(Outcome(False, 'two', ('why',)))
    assert reporter.failures == [Outcome(False, 'two', ('why',))]
    assert reporter.last.description == 'two'


def test_tap_reporter():
    stream = StringIO()
    reporter = TAPReporter(stream)
    reporter.report(Outcome(True, 'one'))
    reporter.report(Outcome(False, 'two', ('found:', "  'a\nb'")))
    reporter.plan()
    assert stream.getvalue() == (
        'ok 1 - one\n'
        'not ok 2 - two\n'
        "#   Failed test 'two'\n"
        '# found:\n'
        "#   'a\n"
        "# b'\n"
        '1..2\n'
    )


def test_outcome_str():
    assert str(Outcome(False, 'two', ('found:', "  'a'"))) == \
        "failed: two\n  found:\n    'a'"
