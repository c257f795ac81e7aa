from hermes.loader import load
from hermes.models import Action, FlatCommand, Submenu
from hermes.resolver import resolve, resolve_title
from hermes.search import SearchIndex


def test_plain_titles_are_untouched(executor) -> None:
    assert resolve_title("Plain", executor, "/bin/sh") == "Plain"
    assert executor.calls == []


def test_computed_titles_run_through_shell(executor) -> None:
    executor.outputs["/bin/sh"] = lambda args: "  main\n" if "branch" in args[1] else ""
    tree = {
        "a": Action("#!fish:echo branch", "git pull"),
        "s": Submenu("#!fish:empty", {"x": Action("#!fish:echo branch", "true")}),
    }
    resolved = resolve(tree, executor, "/bin/sh")

    assert resolved["a"] == Action("main", "git pull")
    assert resolved["s"].title == "(?)"
    assert resolved["s"].children["x"].title == "main"
    assert ("/bin/sh", ["-c", "echo branch"]) in executor.calls
    assert len(executor.calls) == 3


def test_search_matches_path_not_only_label(ctx) -> None:
    tree = load({"a": ["Open Editor", "nvim"], "b": {"_desc": "Dev", "c": ["Build", "make"]}}, ctx)
    index = SearchIndex.from_tree(tree)
    results = index.search("dev")
    assert [r.label for r in results] == ["Build"]
    assert "dev" not in results[0].label.lower()


def test_search_is_case_insensitive_on_label() -> None:
    index = SearchIndex([FlatCommand("o", "Open Editor", "nvim"), FlatCommand("b", "Build", "make")])
    assert [r.key for r in index.search("EDIT")] == ["o"]


def test_search_empty_query_gives_nothing() -> None:
    index = SearchIndex([FlatCommand("o", "Open", "open")])
    assert index.search("") == []


def test_search_is_capped() -> None:
    index = SearchIndex([FlatCommand(str(i), f"item {i}", "true") for i in range(50)])
    assert len(index.search("item")) == 30
    assert len(index.search("item", limit=5)) == 5
