from testframe.components import TestCase, TestSuite


def test_leaf_runs_action_and_traces_itself():
    calls = []
    leaf = TestCase("Login", action=lambda: calls.append("ran"))
    trace = []

    leaf.execute(trace)

    assert calls == ["ran"]
    assert trace == [leaf]


def test_add_on_leaf_is_a_noop():
    leaf = TestCase("A")
    leaf.add(TestCase("B"))

    assert list(leaf.leaves()) == [leaf]


def test_nested_suite_executes_depth_first_in_insertion_order():
    a, b, c = TestCase("A"), TestCase("B"), TestCase("C")
    inner = TestSuite("inner")
    inner.add(b)
    inner.add(c)
    root = TestSuite("root")
    root.add(a)
    root.add(inner)
    trace = []

    root.execute(trace)

    assert trace == [root, a, inner, b, c]
    assert trace.count(root) == 1
    assert list(root.leaves()) == [a, b, c]


def test_empty_suite_is_legal():
    suite = TestSuite("empty")
    trace = []

    suite.execute(trace)

    assert trace == [suite]
    assert suite.tests == []
    assert len(suite) == 0


def test_tests_returns_copy():
    suite = TestSuite("s")
    suite.add(TestCase("A"))

    suite.tests.append(TestCase("B"))

    assert [t.name for t in suite] == ["A"]


def test_execute_without_trace():
    suite = TestSuite("s")
    suite.add(TestCase("A"))

    assert suite.execute() is None
