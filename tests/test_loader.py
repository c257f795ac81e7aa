import json

from hermes.loader import flatten, load, load_config, parse_entry
from hermes.models import Action, FlatCommand, Submenu

EXAMPLE = {"a": ["Open Editor", "nvim"], "b": {"_desc": "Dev", "c": ["Build", "make"]}}


def _all_children_maps(tree):
    yield tree
    for entry in tree.values():
        if isinstance(entry, Submenu):
            yield from _all_children_maps(entry.children)


def test_load_example_tree(ctx) -> None:
    tree = load(EXAMPLE, ctx)
    assert tree == {
        "a": Action("Open Editor", "nvim"),
        "b": Submenu("Dev", {"c": Action("Build", "make")}),
    }


def test_flatten_example(ctx) -> None:
    flat = flatten(load(EXAMPLE, ctx))
    assert sorted(flat, key=lambda f: f.key) == [
        FlatCommand(key="a", label="Open Editor", command="nvim", path=()),
        FlatCommand(key="c", label="Build", command="make", path=("Dev",)),
    ]


def test_flatten_one_record_per_action_with_ancestor_path(ctx) -> None:
    raw = {
        "x": {"_desc": "Outer", "y": {"_desc": "Inner", "z": ["Deep", "true"]}, "q": ["Shallow", "true"]},
        "r": ["Root", "true"],
    }
    flat = flatten(load(raw, ctx))
    paths = {f.label: f.path for f in flat}
    assert paths == {"Deep": ("Outer", "Inner"), "Shallow": ("Outer",), "Root": ()}


def test_metadata_keys_are_skipped(ctx) -> None:
    tree = load({"_comment": "hi", "_desc": "root", "k": ["K", "true"]}, ctx)
    assert list(tree) == ["k"]


def test_argv_command_is_joined(ctx) -> None:
    assert parse_entry(["Open", ["open", "-a", "Safari"]], ctx) == Action("Open", "open -a Safari")


def test_invalid_entries_are_dropped(ctx) -> None:
    assert parse_entry(["only title"], ctx) is None
    assert parse_entry([1, "cmd"], ctx) is None
    assert parse_entry(["Title", 42], ctx) is None
    assert parse_entry("plain string", ctx) is None
    assert parse_entry(7, ctx) is None


def test_empty_submenu_is_dropped(ctx) -> None:
    tree = load({"e": {"_desc": "Empty", "_note": "nothing"}, "k": ["K", "true"]}, ctx)
    assert list(tree) == ["k"]


def test_submenu_without_desc_gets_default_title(ctx) -> None:
    assert parse_entry({"k": ["K", "true"]}, ctx).title == "+"


def test_generator_reference(ctx) -> None:
    tree = load({"v": "generator:workspaces", "u": "generator:unknown"}, ctx)
    assert list(tree) == ["v"]
    assert tree["v"].title == "Workspaces"


def test_keys_are_unique_case_insensitively(ctx) -> None:
    raw = {"k": ["Lower", "true"], "K": ["Upper", "true"], "m": {"_desc": "M", "x": ["x", "1"], "X": ["X", "2"]}}
    tree = load(raw, ctx)
    assert tree["k"].title == "Lower"
    assert "K" not in tree
    for children in _all_children_maps(tree):
        lowered = [k.lower() for k in children]
        assert len(lowered) == len(set(lowered))


def test_load_config_missing_and_invalid(tmp_path) -> None:
    assert load_config(tmp_path / "missing.json") == {}

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert load_config(bad) == {}

    wrong = tmp_path / "list.json"
    wrong.write_text("[1, 2]", encoding="utf-8")
    assert load_config(wrong) == {}


def test_load_config_reads_object(tmp_path) -> None:
    path = tmp_path / "commands.json"
    path.write_text(json.dumps(EXAMPLE), encoding="utf-8")
    assert load_config(path) == EXAMPLE
