# test_runner.py


import logging
import sys
import traceback
import unittest
from datetime import datetime
from typing import Dict

from backend_test import TestBookings, TestGetShowtime, TestHalls, TestLogin, TestPostBooking
from booking_reconciler_test import (
    TestComputeTotal,
    TestResolveAvailability,
    TestValidateSubmission,
)
from booking_session_test import TestBookingSession, TestRequestTracker
from converters_test import (
    TestBookingConverters,
    TestHallConverters,
    TestShowtimeConverters,
    TestUserConverter,
)
from hall_editor_test import TestHallEditor
from local_storage_test import TestLocalStorage
from main_test import TestModifyCommand
from seat_matrix_test import TestCategoryLookup, TestHall, TestSeatMatrix, TestSeatUtils
from seat_validator_test import TestHallValidator, TestSeatFormat
from selection_tracker_test import TestAssignCategory, TestSelectionTracker
from ticket_manager_test import TestTicketList, TestTicketModification


class DetailedTestResult(unittest.TestResult):
    def __init__(self):
        super().__init__()
        self.successes = []
        self.start_times = {}
        self.execution_times = {}

    def startTest(self, test):
        self.start_times[test] = datetime.now()
        super().startTest(test)

    def _record_time(self, test):
        self.execution_times[test] = (datetime.now() - self.start_times[test]).total_seconds()

    def addSuccess(self, test):
        super().addSuccess(test)
        self.successes.append(test)
        self._record_time(test)

    def addError(self, test, err):
        super().addError(test, err)
        self._record_time(test)

    def addFailure(self, test, err):
        super().addFailure(test, err)
        self._record_time(test)


class TestRunner:
    def __init__(self):
        self.setup_logging()

    def setup_logging(self):
        """Configure logging for test execution"""
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[
                logging.FileHandler("test_execution.log"),
                logging.StreamHandler(sys.stdout),
            ],
        )

    def run_component_tests(self):
        """Run tests for each component separately"""
        components = [
            ([TestSeatMatrix, TestCategoryLookup, TestSeatUtils, TestHall], "Seat Matrix Generator"),
            ([TestSelectionTracker, TestAssignCategory], "Selection Tracker"),
            ([TestResolveAvailability, TestComputeTotal, TestValidateSubmission], "Booking Reconciler"),
            ([TestBookingSession, TestRequestTracker], "Booking Session"),
            ([TestHallEditor], "Hall Editor"),
            ([TestTicketList, TestTicketModification], "Tickets"),
            (
                [TestHallConverters, TestShowtimeConverters, TestBookingConverters, TestUserConverter],
                "API Converters",
            ),
            ([TestGetShowtime, TestHalls, TestPostBooking, TestBookings, TestLogin], "Backend"),
            ([TestLocalStorage], "Local Storage"),
            ([TestModifyCommand], "Command Line"),
            ([TestHallValidator, TestSeatFormat], "Validation and Formatting"),
        ]

        results = {}
        for test_classes, component_name in components:
            logging.info(f"\nTesting component: {component_name}")
            results[component_name] = self.run_test_suite(test_classes, component_name)

        return results

    def run_test_suite(self, test_classes, component_name: str) -> Dict:
        """Run the test cases of one component and return results"""
        loader = unittest.TestLoader()
        suite = unittest.TestSuite(
            loader.loadTestsFromTestCase(test_class) for test_class in test_classes
        )
        result = DetailedTestResult()
        suite.run(result)

        test_results = {
            "component": component_name,
            "total_tests": result.testsRun,
            "passed": len(result.successes),
            "failed": len(result.failures),
            "errors": len(result.errors),
            "execution_time": sum(result.execution_times.values()),
            "details": {
                "failures": [
                    {
                        "test": str(test),
                        "message": err,
                        "execution_time": result.execution_times.get(test, 0.0),
                    }
                    for test, err in result.failures
                ],
                "errors": [
                    {
                        "test": str(test),
                        "message": err,
                        "execution_time": result.execution_times.get(test, 0.0),
                    }
                    for test, err in result.errors
                ],
            },
        }

        self.log_results(test_results)
        return test_results

    def log_results(self, results: Dict):
        """Log test results in a readable format"""
        logging.info(f"\nResults for {results['component']}:")
        logging.info("-" * 50)
        logging.info(f"Total Tests: {results['total_tests']}")
        logging.info(f"Passed: {results['passed']}")
        logging.info(f"Failed: {results['failed']}")
        logging.info(f"Errors: {results['errors']}")
        logging.info(f"Total Execution Time: {results['execution_time']:.2f} seconds")

        if results["details"]["failures"]:
            logging.info("\nFailures:")
            for failure in results["details"]["failures"]:
                logging.error(f"\nTest: {failure['test']}")
                logging.error(f"Error: {failure['message']}")

        if results["details"]["errors"]:
            logging.info("\nErrors:")
            for error in results["details"]["errors"]:
                logging.error(f"\nTest: {error['test']}")
                logging.error(f"Error: {error['message']}")


def run_tests() -> bool:
    """Main function to run all tests"""
    runner = TestRunner()
    start_time = datetime.now()
    all_passed = False

    try:
        logging.info("Starting test execution...")
        results = runner.run_component_tests()

        total_tests = sum(r["total_tests"] for r in results.values())
        total_passed = sum(r["passed"] for r in results.values())
        total_failed = sum(r["failed"] for r in results.values())
        total_errors = sum(r["errors"] for r in results.values())

        logging.info("\nOverall Test Results:")
        logging.info("=" * 50)
        logging.info(f"Total Tests Run: {total_tests}")
        logging.info(f"Total Passed: {total_passed}")
        logging.info(f"Total Failed: {total_failed}")
        logging.info(f"Total Errors: {total_errors}")

        success_rate = (total_passed / total_tests) * 100 if total_tests > 0 else 0
        logging.info(f"Success Rate: {success_rate:.2f}%")
        all_passed = total_failed == 0 and total_errors == 0

    except Exception as e:
        logging.error(f"Test execution failed: {str(e)}")
        logging.error(traceback.format_exc())

    finally:
        total_duration = (datetime.now() - start_time).total_seconds()
        logging.info(f"\nTotal Test Suite Duration: {total_duration:.2f} seconds")

    return all_passed


if __name__ == "__main__":
    sys.exit(0 if run_tests() else 1)
