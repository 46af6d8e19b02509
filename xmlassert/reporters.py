""" Reporters receive the outcomes of assertions. Exactly one :class:`Outcome` is
    reported per assertion call.
"""

import logging
import sys
from typing import List, NamedTuple, Optional, TextIO, Tuple


__all__ = ['Outcome', 'Reporter', 'LoggingReporter', 'RecordingReporter', 'TAPReporter']


class Outcome(NamedTuple):
    """ The result of one assertion. ``diagnostics`` are human-readable lines in the
        order they were produced.
    """
    passed: bool
    description: str
    diagnostics: Tuple[str, ...] = ()

    def __str__(self) -> str:
        lines = ['{}: {}'.format('passed' if self.passed else 'failed', self.description)]
        lines.extend('  ' + x for x in self.diagnostics)
        return '\n'.join(lines)


class Reporter:
    """ Base class for reporters. """
    def report(self, outcome: Outcome) -> None:
        raise NotImplementedError


class RecordingReporter(Reporter):
    """ Keeps all reported outcomes in the ``outcomes`` list. """
    def __init__(self):
        self.outcomes: List[Outcome] = []

    def report(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    @property
    def failures(self) -> List[Outcome]:
        return [x for x in self.outcomes if not x.passed]

    @property
    def last(self) -> Optional[Outcome]:
        """ The most recently reported outcome or ``None``. """
        return self.outcomes[-1] if self.outcomes else None


class LoggingReporter(Reporter):
    """ Emits passes as info and failures as warning records. """
    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

    def report(self, outcome: Outcome) -> None:
        if outcome.passed:
            self.logger.info("Passed '{}'.".format(outcome.description))
        else:
            self.logger.warning("Failed '{}':\n{}".format(
                outcome.description, '\n'.join(outcome.diagnostics)))


class TAPReporter(Reporter):
    """ Writes outcomes in the format of the Test Anything Protocol. Call :meth:`plan`
        after the last assertion to write the test plan.
    """
    def __init__(self, stream: TextIO = None):
        self.stream = sys.stdout if stream is None else stream
        self.count = 0

    def report(self, outcome: Outcome) -> None:
        self.count += 1
        self._write('{}ok {} - {}'.format('' if outcome.passed else 'not ',
                                          self.count, outcome.description))
        if not outcome.passed:
            self._write("#   Failed test '{}'".format(outcome.description))
        for diagnostic in outcome.diagnostics:
            for line in diagnostic.split('\n'):
                self._write('# ' + line)

    def plan(self) -> None:
        self._write('1..{}'.format(self.count))

    def _write(self, line: str) -> None:
        self.stream.write(line + '\n')
