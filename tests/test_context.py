"""Tests for TraverseContext, its strategies and ContextBuilder.

Result bubbling, variable scoping and chain navigation are checked both
on hand-built contexts and through real traversals.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from graphtraverser import (
    Action,
    BackRef,
    ContextBuilder,
    ContextType,
    InvalidArgumentError,
    TraverseContext,
    Traverser,
    TraverseVisitor,
)
from graphtraverser.core import NESTED_STRATEGY, ROOT_STRATEGY
from graphtraverser.testing import GraphNode, RecordingVisitor, node_children


def build_root(seed=None, context_vars=None):
    return (ContextBuilder(ContextType.PRE_ORDER)
            .initial_data(seed)
            .vars({} if context_vars is None else context_vars)
            .build())


def build_child(parent, node):
    return (ContextBuilder(ContextType.PRE_ORDER)
            .node(node)
            .parent(parent)
            .initial_data(parent.initial_data)
            .vars(parent.context_vars)
            .build())


def build_post(pre_order):
    return ContextBuilder(ContextType.POST_ORDER).from_context(pre_order).build()


class TestContextBuilder:
    """Strategy choice and scope allocation."""

    def test_root_uses_root_strategy(self):
        scope = {"k": "v"}
        root = build_root("seed", scope)

        assert root.strategy is ROOT_STRATEGY
        assert root.node is None
        assert root.parent is None
        assert root.result == "seed"
        assert root.context_vars is scope

    def test_child_uses_nested_strategy_and_fresh_scope(self):
        root = build_root("seed", {"k": "v"})
        child = build_child(root, "a")

        assert child.strategy is NESTED_STRATEGY
        assert child.context_vars == {}
        assert child.context_vars is not root.context_vars
        assert child.initial_data == "seed"

    def test_post_order_shares_scope_with_pre_order(self):
        root = build_root()
        child = build_child(root, "a")
        post = build_post(child)

        assert post.is_post_order
        assert not child.is_post_order
        assert post.context_vars is child.context_vars
        assert post.node == "a"
        assert post.parent is child.parent

    def test_forced_strategy(self):
        root = build_root("seed")
        isolated = (ContextBuilder(ContextType.PRE_ORDER)
                    .node("a")
                    .parent(root)
                    .strategy(ROOT_STRATEGY)
                    .build())
        isolated.set_result("local")

        assert isolated.result == "local"
        assert root.result == "seed"

    def test_vars_must_not_be_none(self):
        with pytest.raises(InvalidArgumentError):
            ContextBuilder(ContextType.PRE_ORDER).vars(None)

    def test_context_type_required(self):
        with pytest.raises(InvalidArgumentError):
            ContextBuilder(None)

    def test_from_context_requires_context(self):
        with pytest.raises(InvalidArgumentError):
            ContextBuilder(ContextType.POST_ORDER).from_context(None)


class TestResults:
    """Nested results bubble up to the root."""

    def test_set_result_bubbles_to_root(self):
        root = build_root()
        a = build_child(root, "a")
        b = build_child(a, "b")

        assert b.set_result(42) is b
        assert root.result == 42
        assert a.context_result == 42
        assert b.context_result == 42

    def test_result_reads_through_parent(self):
        root = build_root("seed")
        a = build_child(root, "a")
        b = build_child(a, "b")

        root.result = "updated"
        assert b.result == "updated"
        assert b.get_result() == "updated"

    def test_parent_result(self):
        root = build_root(0)
        a = build_child(root, "a")

        a.parent_result = 7
        assert a.parent_result == 7
        assert root.result == 7

    def test_sibling_sees_previous_result(self):
        root = build_root([])
        a = build_child(root, "a")
        b = build_child(root, "b")

        a.result.append("a")
        assert b.result == ["a"]


class TestVariables:
    """Lexical scoping of context variables."""

    def test_lookup_falls_through_to_declaring_scope(self):
        root = build_root(context_vars={"color": "red"})
        a = build_child(root, "a")
        b = build_child(a, "b")

        assert b.get_var("color") == "red"
        assert b.get_var("missing") is None
        assert b.get_var("missing", "fallback") == "fallback"

    def test_declared_none_is_not_missing(self):
        root = build_root(context_vars={"color": "red"})
        a = build_child(root, "a").declare_var("color")
        b = build_child(a, "b")

        assert b.get_var("color", "fallback") is None
        assert b.get_var("missing", "fallback") == "fallback"
        assert root.get_var("color", "fallback") == "red"

    def test_root_declared_none(self):
        root = build_root(context_vars={"flag": None})
        assert root.get_var("flag", True) is None
        assert build_child(root, "a").get_var("flag", True) is None

    def test_declared_variable_shadows(self):
        root = build_root(context_vars={"color": "red"})
        a = build_child(root, "a").declare_var("color", "blue")
        b = build_child(a, "b")
        sibling = build_child(root, "c")

        assert b.get_var("color") == "blue"
        assert sibling.get_var("color") == "red"

    def test_set_var_updates_nearest_declaring_scope(self):
        root = build_root(context_vars={"count": 0})
        a = build_child(root, "a")
        b = build_child(a, "b")

        assert b.set_var("count", 1) == 0
        assert root.context_vars["count"] == 1
        assert "count" not in b.context_vars

    def test_set_var_prefers_local_declaration(self):
        root = build_root(context_vars={"count": 0})
        a = build_child(root, "a").declare_var("count", 10)

        assert a.set_var("count", 11) == 10
        assert a.context_vars["count"] == 11
        assert root.context_vars["count"] == 0

    def test_undeclared_set_var_defines_in_immediate_parent(self):
        root = build_root()
        a = build_child(root, "a")
        b = build_child(a, "b")
        c = build_child(a, "c")

        assert b.set_var("k", "v") is None
        assert a.context_vars == {"k": "v"}
        assert c.get_var("k") == "v"
        assert root.get_var("k") is None

    def test_var_is_fluent(self):
        root = build_root()
        a = build_child(root, "a").declare_var("k")
        assert a.var("k", 1) is a
        assert a.get_var("k") == 1

    def test_root_strategy_set_var(self):
        root = build_root()
        assert root.set_var("k", 1) is None
        assert root.set_var("k", 2) == 1
        assert root.get_var("k") == 2


class TestNavigation:
    """parents(), path(), depth() and is_root."""

    def test_parents_nearest_first(self):
        root = build_root()
        a = build_child(root, "a")
        b = build_child(a, "b")
        assert list(b.parents()) == [b, a, root]

    def test_path_skips_synthetic_root(self):
        root = build_root()
        a = build_child(root, "a")
        b = build_child(a, "b")

        assert list(b.path()) == ["b", "a"]
        assert list(root.path()) == []

    def test_depth(self):
        root = build_root()
        a = build_child(root, "a")
        b = build_child(a, "b")

        assert a.depth() == 0
        assert b.depth() == 1
        assert build_post(b).depth() == 1

    def test_is_root(self):
        root = build_root()
        a = build_child(root, "a")
        b = build_child(a, "b")

        assert root.is_root
        assert a.is_root
        assert not b.is_root

    def test_repr(self):
        root = build_root()
        assert repr(build_child(root, "a")) == "TraverseContext(pre, node='a')"
        assert repr(build_post(build_child(root, "a"))) == "TraverseContext(post, node='a')"


class TestBackRef:
    """is_back_ref keeps the tracker's answer."""

    def test_first_visit(self):
        context = build_child(build_root(), "a")
        assert not context.is_back_ref(lambda ctx: None)
        assert context.back_ref_result is None

    def test_back_ref_result(self):
        context = build_child(build_root(), "a")
        assert context.is_back_ref(lambda ctx: BackRef("earlier"))
        assert context.back_ref_result == "earlier"

    def test_back_ref_with_none_result(self):
        context = build_child(build_root(), "a")
        assert context.is_back_ref(lambda ctx: BackRef(None))
        assert context.back_ref_result is None


class TestVariablesDuringTraversal:
    """Scoping observed from visitors in a real traversal."""

    def test_set_var(self):
        root = GraphNode("root").child(GraphNode("left")).child(GraphNode("right"))
        observed = []

        class SetVarVisitor(TraverseVisitor):
            def enter(self, context):
                if context.node is root:
                    context.declare_var(str)
                    context.set_var(str, "rootVar")
                else:
                    observed.append((context.get_var(str), context.context_vars.get(str)))
                return Action.CONTINUE

            def leave(self, context):
                if context.node is root:
                    observed.append((context.get_var(str), context.context_vars.get(str)))
                return Action.CONTINUE

        Traverser.depth_first(node_children).traverse(root, None, SetVarVisitor())
        assert observed == [
            ("rootVar", None),
            ("rootVar", None),
            ("rootVar", "rootVar"),
        ]

    def test_shadowing_is_limited_to_subtree(self):
        root = (GraphNode("root")
                .child(GraphNode("left").child(GraphNode("left-child")))
                .child(GraphNode("right")))
        seen = {}

        class ShadowVisitor(TraverseVisitor):
            def enter(self, context):
                name = context.node.data
                if name == "root":
                    context.declare_var("x", 1)
                elif name == "left":
                    context.declare_var("x", 2)
                seen["enter " + name] = context.get_var("x")
                return Action.CONTINUE

            def leave(self, context):
                seen["leave " + context.node.data] = context.get_var("x")
                return Action.CONTINUE

        Traverser.depth_first(node_children).traverse(root, None, ShadowVisitor())
        assert seen == {
            "enter root": 1,
            "enter left": 2,
            "enter left-child": 2,
            "leave left-child": 2,
            "leave left": 2,
            "enter right": 1,
            "leave right": 1,
            "leave root": 1,
        }

    def test_caller_vars_form_root_scope(self):
        root = GraphNode("root").child(GraphNode("child"))
        scope = {"color": "red"}
        seen = []

        class ColorVisitor(TraverseVisitor):
            def enter(self, context):
                seen.append(context.get_var("color"))
                if context.node is root:
                    context.set_var("color", "blue")
                return Action.CONTINUE

        Traverser.breadth_first(node_children).traverse(root, None, ColorVisitor(), vars=scope)
        assert seen == ["red", "blue"]
        assert scope == {"color": "blue"}

    def test_per_edge_variables(self):
        root = GraphNode("root").child(GraphNode("a").child(GraphNode("b")))

        def children(traverser, context):
            for child in context.node.children:
                yield (traverser.new_context(context, child)
                       .declare_var("edge", (context.node.data, child.data)))

        edges = []

        class EdgeVisitor(TraverseVisitor):
            def enter(self, context):
                edges.append(context.get_var("edge"))
                return Action.CONTINUE

        Traverser.depth_first_contexts(children).traverse(root, None, EdgeVisitor())
        assert edges == [None, ("root", "a"), ("a", "b")]


class TestCustomContexts:
    """Custom builders plug into the engine."""

    def test_context_builder_factory(self):
        class TaggedContext(TraverseContext):
            tag = "tagged"

        class TaggedBuilder(ContextBuilder):
            context_class = TaggedContext

        root = GraphNode("root").child(GraphNode("child"))
        visitor = RecordingVisitor()
        traverser = Traverser.depth_first(node_children).with_context_builder_factory(TaggedBuilder)
        traverser.traverse(root, None, visitor)

        assert visitor.entered == ["root", "child"]
        assert all(isinstance(context, TaggedContext) for context in visitor.contexts)

    def test_post_construct_hook(self):
        built = []

        class CountingBuilder(ContextBuilder):
            def _post_construct(self, context):
                built.append(context.context_type)
                return context

        root = GraphNode("root").child(GraphNode("child"))
        Traverser.breadth_first(node_children) \
            .with_context_builder_factory(CountingBuilder) \
            .traverse(root, None, TraverseVisitor())

        # synthetic root, two pre-order and two post-order contexts
        assert built.count(ContextType.PRE_ORDER) == 3
        assert built.count(ContextType.POST_ORDER) == 2
