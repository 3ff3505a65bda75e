import unittest
from unittest import mock

from django.db import OperationalError

from skillquest.learning_core.common.errors import UnknownRoadmap
from skillquest.learning_core.common.retry import create_retry_decorator, is_retryable


class RetryDecoratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls = 0

    def _flaky(self) -> str:
        self.calls += 1
        if self.calls == 1:
            raise OperationalError("database is locked")
        return "ok"

    def test_retries_transient_error_outside_transaction(self) -> None:
        decorated = create_retry_decorator(max_attempts=3, min_wait=0, max_wait=0)(self._flaky)
        with mock.patch("skillquest.learning_core.common.retry.connection") as connection:
            connection.in_atomic_block = False
            self.assertEqual(decorated(), "ok")
        self.assertEqual(self.calls, 2)

    def test_does_not_retry_inside_atomic_block(self) -> None:
        """
        트랜잭션 안에서는 같은 쿼리를 다시 실행하지 않고 예외를 그대로 던지는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        decorated = create_retry_decorator(max_attempts=3, min_wait=0, max_wait=0)(self._flaky)
        with mock.patch("skillquest.learning_core.common.retry.connection") as connection:
            connection.in_atomic_block = True
            with self.assertRaises(OperationalError):
                decorated()
        self.assertEqual(self.calls, 1)

    def test_domain_errors_are_not_retryable(self) -> None:
        with mock.patch("skillquest.learning_core.common.retry.connection") as connection:
            connection.in_atomic_block = False
            self.assertFalse(is_retryable(UnknownRoadmap("roadmap-1")))
            self.assertTrue(is_retryable(TimeoutError()))


if __name__ == "__main__":
    unittest.main()
