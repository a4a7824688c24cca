#!/usr/bin/env python3
"""Demo script for graphtraverser.

Walks a small company reporting graph (with a dotted-line manager, so
it is not a tree) and shows the main ways of using the engine:
visitors with SKIP/QUIT, context variables, iterators with path() and
the functional helpers.
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from graphtraverser import (
    Action,
    TraversalConfig,
    Traverser,
    TraverseVisitor,
    VisitOrder,
    detect_cycles,
    find_first,
)


class Employee:
    def __init__(self, name, title):
        self.name = name
        self.title = title
        self.reports = []

    def manages(self, *employees):
        self.reports.extend(employees)
        return self

    def __repr__(self):
        return f"Employee({self.name!r})"


def reports(employee):
    return employee.reports


def build_company():
    ada = Employee("Ada", "CEO")
    grace = Employee("Grace", "CTO")
    linus = Employee("Linus", "Dev Lead")
    ken = Employee("Ken", "Ops Lead")
    dennis = Employee("Dennis", "Engineer")
    barbara = Employee("Barbara", "CFO")
    frances = Employee("Frances", "Accountant")

    ada.manages(grace, barbara)
    grace.manages(linus, ken)
    linus.manages(dennis)
    ken.manages(dennis)            # dotted line
    barbara.manages(frances)
    return ada


class HeadcountVisitor(TraverseVisitor):
    """Counts everyone below each manager using a context variable."""

    def __init__(self):
        self.headcount = {}

    def enter(self, context):
        context.declare_var("below", 0)
        return Action.CONTINUE

    def leave(self, context):
        below = context.get_var("below")
        self.headcount[context.node.name] = below
        # Add this subtree to the nearest manager's count
        if not context.is_root:
            parent_count = context.parent.get_var("below")
            context.parent.set_var("below", parent_count + below + 1)
        return Action.CONTINUE


def demo_headcount(ceo):
    print("\n=== Headcount per manager (post-order, depth-first) ===")
    visitor = HeadcountVisitor()
    Traverser.depth_first(reports).traverse(ceo, None, visitor)
    for name, count in visitor.headcount.items():
        print(f"  {name:<8} {count}")


def demo_org_chart(ceo):
    print("\n=== Org chart (pre-order iterator with path) ===")
    iterator = Traverser.depth_first(reports).pre_order_iterator(ceo)
    for employee in iterator:
        indent = "  " * (len(iterator.path()) - 1)
        print(f"  {indent}{employee.name} ({employee.title})")


def demo_levels(ceo):
    print("\n=== Breadth-first ===")
    config = TraversalConfig.breadth_first()
    print("  " + ", ".join(e.name for e in config.iterate(ceo, reports)))

    print("\n=== Post-order depth-first ===")
    config = TraversalConfig.depth_first(order=VisitOrder.POST_ORDER)
    print("  " + ", ".join(e.name for e in config.iterate(ceo, reports)))


def demo_search(ceo):
    print("\n=== Search with QUIT ===")
    engineer = find_first(ceo, reports, lambda e: e.title == "Engineer")
    print(f"  First engineer: {engineer.name}")

    print("\n=== Shared reports ===")
    for manager, employee in detect_cycles(ceo, reports):
        print(f"  {employee.name} also reports to {manager.name}")


def main():
    if "--debug" in sys.argv:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    ceo = build_company()
    demo_org_chart(ceo)
    demo_levels(ceo)
    demo_headcount(ceo)
    demo_search(ceo)


if __name__ == "__main__":
    main()
