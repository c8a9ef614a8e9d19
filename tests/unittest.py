from typing import Awaitable, Type, TypeVar

from twisted.internet import defer
from twisted.python.failure import Failure
from twisted.trial import unittest

TV = TypeVar("TV")


class TestCase(unittest.SynchronousTestCase):
    """A trial TestCase running coroutines to completion without a reactor.

    Every fake collaborator used by the tests resolves synchronously, so the
    Deferred wrapping a coroutine has fired by the time it is returned.
    """

    def get_success(self, awaitable: Awaitable[TV]) -> TV:
        d = defer.ensureDeferred(awaitable)
        return self.successResultOf(d)

    def get_failure(self, awaitable: Awaitable, exc: Type[Exception]) -> Failure:
        """Run `awaitable` and check that it fails with `exc`.

        Returns:
            the Failure, whose `value` is the raised exception.
        """
        d = defer.ensureDeferred(awaitable)
        return self.failureResultOf(d, exc)
