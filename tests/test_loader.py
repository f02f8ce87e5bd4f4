"""Tests for loading layouts from YAML."""

from pathlib import Path

import pytest

from keeplayout import LayoutLoader, MissingTargetError, Priority, Relation

ASSETS = Path(__file__).parent.parent / "assets" / "layouts"


def frame_of(view):
    return (view.frame.x, view.frame.y, view.frame.width, view.frame.height)


def test_profile_card_layout():
    root = LayoutLoader().load(ASSETS / "profile_card.yaml")
    root.layout_if_needed()

    assert root.name == "screen"
    assert frame_of(root.find("header")) == pytest.approx((0, 0, 320, 64))
    assert frame_of(root.find("title")) == pytest.approx((100, 20, 120, 24))
    assert frame_of(root.find("card")) == pytest.approx((20, 80, 280, 180))
    assert frame_of(root.find("avatar")) == pytest.approx((16, 16, 64, 64))
    assert frame_of(root.find("name")) == pytest.approx((92, 16, 100, 20))
    assert root.find("name").global_frame().x == pytest.approx(112)
    assert root.find("title").baseline_offset == 6


def test_keep_options_reach_attributes():
    root = LayoutLoader().load_string("""
name: screen
frame: [0, 0, 100, 100]
views:
  box:
    keep:
      width: {value: 40, relation: min, priority: low+1}
      left_inset: 5
""")
    box = root.find("box")
    width = box.keep_width(Relation.GREATER_OR_EQUAL)
    assert width.is_active
    assert width.value == 40
    assert width.priority == Priority.low() + 1
    assert box.keep_left_inset().value == 5


def test_proxy_entries():
    root = LayoutLoader().load_string("""
frame: [0, 0, 200, 200]
views:
  anchor:
    frame: [10, 10, 50, 50]
  box:
    keep:
      insets: {left: 10, top: 20}
      size_to: {to: anchor, value: 0.5}
      center_align: {to: anchor}
""")
    box = root.find("box")
    assert box.keep_left_inset().is_active
    assert box.keep_top_inset().is_active
    assert not box.keep_right_inset().is_active
    assert box.keep_size_to(root.find("anchor")).value == 0.5
    assert box.keep_group("center_align", root.find("anchor")).is_active


def test_views_may_reference_later_views():
    root = LayoutLoader().load_string("""
frame: [0, 0, 100, 100]
views:
  child:
    parent: container
    keep:
      left_offset: {to: sibling, value: 4}
  container: {}
  sibling:
    parent: container
""")
    child = root.find("child")
    assert child.superview is root.find("container")
    assert child.keep_left_offset_to(root.find("sibling")).constraint.owner is root.find("container")


def test_empty_layout():
    root = LayoutLoader().load_string("")
    assert root.name == "root"
    assert root.subviews == []


@pytest.mark.parametrize("text,message", [
    ("views:\n  a: {parent: nowhere}", "unknown parent"),
    ("views:\n  a: {parent: b}\n  b: {parent: a}", "inside itself"),
    ("views:\n  a: {keep: {sideways: 3}}", "Unknown keep"),
    ("views:\n  a: {keep: {width: {value: 3, colour: red}}}", "Unknown options"),
    ("views:\n  a: {keep: {left_offset: {to: ghost, value: 1}}}", "unknown view"),
    ("views:\n  a: {keep: {edge_align: 0}}", "needs a 'to' view"),
    ("views:\n  a: {}\n  b: {keep: {width: {to: a, value: 10}}}", "takes no 'to' view"),
    ("views:\n  a: {}\n  b: {keep: {insets: {to: a, value: 10}}}", "takes no 'to' view"),
    ("views:\n  a: {}\n  b: {keep: {centered: {to: a}}}", "takes no 'to' view"),
    ("views:\n  a: {keep: {size: {value: 5, width: 10}}}", "mixes 'value'"),
    ("views:\n  a: {keep: {size: {depth: 4}}}", "Unknown fields"),
])
def test_invalid_layouts(text, message):
    with pytest.raises(ValueError, match=message):
        LayoutLoader().load_string(text)


def test_relationship_without_target_fails():
    with pytest.raises(MissingTargetError):
        LayoutLoader().load_string("views:\n  a: {keep: {left_offset: 3}}")
