"""
a tiny test harness.

test modules register cases with @test("description") and check them with
assert_that / assert_equal / raises. running a module directly calls run(),
which prints a report. the cases are ordinary zero-argument test_* functions,
so pytest collects the same modules without any extra glue.
"""
import time
import traceback
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Type


class _c:
    """ansi colour codes for the report."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


@dataclass
class _Case:
    func: Callable[[], Any]
    description: str
    module: str


@dataclass
class _Outcome:
    case: _Case
    passed: bool
    error: Optional[str] = None
    duration_ms: float = 0.0


@dataclass
class _Registry:
    cases: List[_Case] = field(default_factory=list)
    outcomes: List[_Outcome] = field(default_factory=list)


_registry = _Registry()


class TestAssertionError(AssertionError):
    """raised by the assertion helpers, told apart from unexpected errors in the report."""
    __test__ = False


# --- registration ---

def test(description: str) -> Callable:
    """decorator to register a function as a test case."""

    def decorator(func: Callable) -> Callable:
        _registry.cases.append(_Case(func, description, func.__module__))

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


# --- assertions ---

def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise TestAssertionError(message)


def assert_equal(actual: Any, expected: Any, message: str = "") -> None:
    if actual != expected:
        prefix = f"{message}: " if message else ""
        raise TestAssertionError(f"{prefix}expected {expected!r}, got {actual!r}")


@contextmanager
def raises(expected: Type[BaseException], contains: Optional[str] = None):
    """the block must raise expected (optionally with contains in the message)."""
    try:
        yield
    except expected as e:
        if contains is not None and contains not in str(e):
            raise TestAssertionError(f"{type(e).__name__} raised without '{contains}' in: {e}")
        return
    raise TestAssertionError(f"expected {expected.__name__} to be raised")


# --- running ---

def run(title: str = "test run", module: Optional[str] = None, verbose_errors: bool = False) -> bool:
    """runs the registered cases (of one module, if given), prints a report, returns success."""
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    started = time.perf_counter()

    selected = [case for case in _registry.cases if module is None or case.module == module]
    outcomes = [_run_case(case, verbose_errors) for case in selected]
    _registry.outcomes.extend(outcomes)

    for outcome in outcomes:
        if outcome.passed:
            print(f"  {_c.ok}pass{_c.reset}  {outcome.case.description} "
                  f"{_c.grey}({outcome.duration_ms:.1f}ms){_c.reset}")
        else:
            print(f"  {_c.fail}FAIL{_c.reset}  {outcome.case.description}")
            print(f"    {_c.grey}-> {outcome.error}{_c.reset}")

    _print_summary(outcomes, started)

    # run cases only once per call so several suites can share an interpreter
    _registry.cases = [case for case in _registry.cases if case not in selected]
    return all(outcome.passed for outcome in outcomes)


def _run_case(case: _Case, verbose_errors: bool) -> _Outcome:
    started = time.perf_counter()
    try:
        case.func()
        error = None
    except TestAssertionError as e:
        error = f"assertion failed: {e}"
    except Exception as e:
        error = f"{type(e).__name__}: {e}"
        if verbose_errors:
            traceback.print_exc()
    return _Outcome(case, error is None, error, (time.perf_counter() - started) * 1000)


def _print_summary(outcomes: List[_Outcome], started: float) -> None:
    duration = (time.perf_counter() - started) * 1000
    passed = sum(1 for outcome in outcomes if outcome.passed)
    failed = len(outcomes) - passed
    colour = _c.ok if failed == 0 else _c.fail

    print(f"\n{colour}--- summary ---{_c.reset}")
    print(f"  ran {_c.info}{len(outcomes)}{_c.reset} tests in {_c.warn}{duration:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {passed}{_c.reset}, {_c.fail}failed: {failed}{_c.reset}")
    print(f"{colour}---------------{_c.reset}\n")
