from __future__ import annotations

from pathlib import Path
from typing import Mapping

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from factalgebra.fact import Fact


def write_junit(
    path: Path, facts: Mapping[str, Fact], suite_name: str = "facts"
) -> Path:
    """Write one test case per named fact to *path*, return the path.

    No facts are reported as failures carrying the rendered fact.
    """
    xml = JUnitXml()
    suite = TestSuite(suite_name)

    max_complexity = 0
    for name, fact in facts.items():
        case = TestCase(name)
        case.classname = suite_name
        rendered = fact.as_string
        if fact.is_no:
            failure = Failure(rendered)
            # Attributes lose newlines; keep the full tree in the body.
            failure.text = rendered
            case.result = [failure]
        else:
            case.system_out = rendered
        max_complexity = max(max_complexity, fact.complexity)
        suite.add_testcase(case)

    suite.add_property("complexity_max", str(max_complexity))

    # Use append (not +=) to preserve properties
    xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
