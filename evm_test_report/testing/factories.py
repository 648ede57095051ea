"""Test factories for generating test data."""

from polyfactory import Use
from polyfactory.factories.pydantic_factory import ModelFactory

from evm_test_report.models.result import TestResult, TestStatus


class TestResultFactory(ModelFactory[TestResult]):
    """Factory for TestResult without return data or logs."""

    __test__ = False

    status = TestStatus.SUCCESS
    gas = Use(ModelFactory.__random__.randint, 21000, 1_000_000)
    return_data = None
    logs = Use(list)
