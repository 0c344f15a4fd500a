import pytest

from consoler.matcher import Count, Flag, Matcher, MatchResult, Positional, Value
from consoler.options import Options


def run_match(args: list[str], definition: str) -> MatchResult | None:
    return Matcher(Options(definition)).match(args)


class TestSingleOptions:
    def test_single_argument(self):
        match = run_match(["John"], "name")
        assert match is not None
        assert match["name"] == "John"

    def test_explicit_argument(self):
        match = run_match(["John"], "<name>")
        assert match is not None
        assert match["name"] == "John"

    def test_single_short(self):
        match = run_match(["-f"], "-f")
        assert match is not None
        assert match["f"] == 1

    def test_single_long(self):
        match = run_match(["--force"], "--force")
        assert match is not None
        assert match["force"] is True

    def test_single_short_value(self):
        match = run_match(["-n", "19"], "-n=")
        assert match is not None
        assert match["n"] == "19"

    def test_single_long_value(self):
        match = run_match(["--name", "John"], "--name=")
        assert match is not None
        assert match["name"] == "John"

    def test_value_looks_like_a_flag(self):
        match = run_match(["--name", "-x"], "--name=")
        assert match is not None
        assert match["name"] == "-x"

    def test_dashed_long_option(self):
        match = run_match(["--dashed-option"], "--dashed-option")
        assert match is not None
        assert match["dashed-option"] is True

    @pytest.mark.parametrize(
        ("definition", "name", "expected"),
        [
            ("[-n]", "n", 0),
            ("[--force]", "force", False),
            ("[name]", "name", None),
            ("[-n=]", "n", None),
            ("[--name=]", "name", None),
        ],
    )
    def test_optional_defaults(self, definition, name, expected):
        match = run_match([], definition)
        assert match is not None
        assert match[name] is expected

    @pytest.mark.parametrize(
        ("args", "definition"),
        [
            (["--f"], "-f"),
            (["-f"], "--f"),
            (["--name"], "name"),
            (["-n"], "n"),
            (["--nope"], "[--force]"),
            (["-x"], "[-v]"),
            (["-vx"], "[-v]"),
            (["--name"], "--name="),
            (["-n"], "-n="),
            ([], "--force"),
            ([], "-f"),
            ([], "name"),
            (["--force"], "--force name"),
            (["a"], "[opt] first second"),
            (["a", "b"], "[x y] first second third"),
        ],
    )
    def test_no_match(self, args, definition):
        assert run_match(args, definition) is None


class TestShortFlags:
    def test_multi_short(self):
        match = run_match(["-vv", "-v"], "-v")
        assert match is not None
        assert match["v"] == 3

    def test_multi_short_mixed(self):
        match = run_match(["-vvf", "-v"], "-vf")
        assert match is not None
        assert match["v"] == 3
        assert match["f"] == 1

    def test_short_group_with_value(self):
        match = run_match(["-vn", "10"], "[-v] -n=")
        assert match is not None
        assert match["v"] == 1
        assert match["n"] == "10"

    def test_short_group_with_value_declared_together(self):
        match = run_match(["-vn", "10", "-v"], "-vn=")
        assert match is not None
        assert match["v"] == 2
        assert match["n"] == "10"

    def test_short_group_value_not_last_is_counted(self):
        match = run_match(["-fv", "x"], "-f= [-v]")
        assert match is not None
        assert match.bindings["f"] == Count(1)
        assert match["v"] == 1
        assert match["remaining"] == ["x"]

    def test_short_group_value_not_last_then_value(self):
        match = run_match(["-nv", "-n", "10"], "[-v] -n=")
        assert match is not None
        assert match["v"] == 1
        assert match["n"] == "10"

    def test_short_group_value_missing(self):
        assert run_match(["-vn"], "[-v] -n=") is None

    def test_single_dash_is_positional(self):
        match = run_match(["-"], "file")
        assert match is not None
        assert match["file"] == "-"


class TestSkipParsing:
    def test_skip_parsing(self):
        match = run_match(["--", "--hello"], "name")
        assert match is not None
        assert match["name"] == "--hello"

    def test_flags_before_skip(self):
        match = run_match(["-v", "--", "-v", "--"], "[-v] a b")
        assert match is not None
        assert match["v"] == 1
        assert match["a"] == "-v"
        assert match["b"] == "--"

    def test_separator_is_not_a_value(self):
        match = run_match(["--"], "[name]")
        assert match is not None
        assert match["name"] is None
        assert match["remaining"] == []


class TestAliases:
    @pytest.mark.parametrize("args", [["-f"], ["--force"]])
    def test_short_primary(self, args):
        match = run_match(args, "-f|--force")
        assert match is not None
        assert match["f"] == 1
        assert match["force"] == 1

    @pytest.mark.parametrize("args", [["-f"], ["--force"]])
    def test_long_primary(self, args):
        match = run_match(args, "--force|-f")
        assert match is not None
        assert match["f"] is True
        assert match["force"] is True

    def test_optional_alias_default(self):
        match = run_match([], "[--force|-f]")
        assert match is not None
        assert match["f"] is False
        assert match["force"] is False

    @pytest.mark.parametrize("args", [["-f", "x"], ["--file", "x"]])
    def test_value(self, args):
        match = run_match(args, "--file=|-f=")
        assert match is not None
        assert match["f"] == "x"
        assert match["file"] == "x"

    @pytest.mark.parametrize("args", [["--f"], ["-force"]])
    def test_wrong_type(self, args):
        assert run_match(args, "--force|-f") is None

    def test_alias_in_short_group(self):
        match = run_match(["-vf"], "[-v] --force|-f")
        assert match is not None
        assert match["v"] == 1
        assert match["force"] is True


class TestPositionals:
    def test_multi_argument(self):
        match = run_match(["John", "Doe"], "first_name last_name")
        assert match is not None
        assert match["first_name"] == "John"
        assert match["last_name"] == "Doe"

    def test_multi_argument_optional(self):
        match = run_match(["Doe"], "[first_name] last_name")
        assert match is not None
        assert match["first_name"] is None
        assert match["last_name"] == "Doe"

    def test_multi_argument_grouped_optional_1(self):
        match = run_match(["John"], "[first_name last_name]")
        assert match is not None
        assert match["first_name"] is None
        assert match["last_name"] is None
        assert match["remaining"] == ["John"]

    def test_multi_argument_grouped_optional_2(self):
        match = run_match(["John"], "[first_name last_name] [name]")
        assert match is not None
        assert match["first_name"] is None
        assert match["last_name"] is None
        assert match["name"] == "John"

    def test_multi_argument_grouped_optional_3(self):
        match = run_match(
            ["1", "2", "3", "4"],
            "[first] [second thirth] fourth [fifth] [sixth] seventh",
        )
        assert match is not None
        assert match["first"] is None
        assert match["second"] == "1"
        assert match["thirth"] == "2"
        assert match["fourth"] == "3"
        assert match["fifth"] is None
        assert match["sixth"] is None
        assert match["seventh"] == "4"

    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (["1", "2"], {"a": None, "b": None, "c": "1", "d": None, "e": "2"}),
            (["1", "2", "3"], {"a": "1", "b": None, "c": "2", "d": None, "e": "3"}),
            (["1", "2", "3", "4"], {"a": "1", "b": "2", "c": "3", "d": None, "e": "4"}),
            (
                ["1", "2", "3", "4", "5"],
                {"a": "1", "b": "2", "c": "3", "d": "4", "e": "5"},
            ),
        ],
    )
    def test_equal_groups_filled_in_definition_order(self, args, expected):
        match = run_match(args, "[a] [b] c [d] e")
        assert match is not None
        assert {name: match[name] for name in expected} == expected

    def test_larger_group_wins_across_mandatory_arguments(self):
        match = run_match(["1", "2", "3", "4"], "[a] b [c d] e")
        assert match is not None
        assert match["a"] is None
        assert match["b"] == "1"
        assert match["c"] == "2"
        assert match["d"] == "3"
        assert match["e"] == "4"

    def test_trailing_optionals(self):
        match = run_match(["1", "2", "3"], "a [b c] [d]")
        assert match is not None
        assert match["a"] == "1"
        assert match["b"] == "2"
        assert match["c"] == "3"
        assert match["d"] is None

    def test_value_argument(self):
        match = run_match(["--reason", "no more", "hello.rb"], "--reason= filename")
        assert match is not None
        assert match["reason"] == "no more"
        assert match["filename"] == "hello.rb"

    def test_flags_between_positionals(self):
        match = run_match(["a", "-v", "b"], "[-v] first second")
        assert match is not None
        assert match["first"] == "a"
        assert match["second"] == "b"
        assert match["v"] == 1

    def test_remaining(self):
        match = run_match(["a", "b", "c"], "name")
        assert match is not None
        assert match["name"] == "a"
        assert match["remaining"] == ["b", "c"]
        assert match.remaining == ["b", "c"]

    def test_party_deluxe(self):
        match = run_match(
            ["-vv", "-v", "--reason", "no more", "hello.rb", "something"],
            "[-v] [-f] [--lang] [--reason=] [foo bar] filename -- yay!",
        )
        assert match is not None
        assert match["v"] == 3
        assert match["f"] == 0
        assert match["lang"] is False
        assert match["reason"] == "no more"
        assert match["foo"] is None
        assert match["bar"] is None
        assert match["filename"] == "hello.rb"
        assert match["remaining"] == ["something"]


class TestMatchResult:
    def test_mapping(self):
        match = run_match(["-v", "x", "y"], "[-v|--verbose] name")
        assert match is not None
        assert dict(match) == {
            "v": 1,
            "verbose": 1,
            "name": "x",
            "remaining": ["y"],
        }
        assert len(match) == 4
        assert "verbose" in match
        assert "missing" not in match
        assert match.get("missing") is None
        with pytest.raises(KeyError):
            match["missing"]

    def test_bindings(self):
        match = run_match(
            ["-v", "--lang", "en", "x"], "[-v] [--force] [--lang=] [-o=] name"
        )
        assert match is not None
        assert dict(match.bindings) == {
            "v": Count(1),
            "force": Flag(False),
            "lang": Value("en"),
            "o": Value(None),
            "name": Positional("x"),
        }

    def test_bindings_are_read_only(self):
        match = run_match(["x"], "name")
        assert match is not None
        with pytest.raises(TypeError):
            match.bindings["name"] = Positional("y")  # type: ignore

    def test_remaining_is_a_copy(self):
        match = run_match(["x", "y"], "name")
        assert match is not None
        match["remaining"].append("z")
        match.remaining.append("z")
        assert match["remaining"] == ["y"]

    def test_option_named_remaining(self):
        match = run_match(["a", "b"], "remaining")
        assert match is not None
        assert match["remaining"] == "a"
        assert match.remaining == ["b"]
        assert len(match) == 1
        assert list(match) == ["remaining"]

    def test_repr(self):
        match = run_match(["x"], "name")
        assert repr(match) == "MatchResult({'name': 'x', 'remaining': []})"


class TestMatcher:
    def test_matcher_is_reusable(self):
        matcher = Matcher(Options("[-v] [name]"))

        first = matcher.match(["-vv", "a"])
        second = matcher.match([])
        assert matcher.match(["--nope"]) is None
        third = matcher.match(["-v"])

        assert first is not None and second is not None and third is not None
        assert first["v"] == 2 and first["name"] == "a"
        assert second["v"] == 0 and second["name"] is None
        assert third["v"] == 1 and third["name"] is None

    def test_args_are_not_modified(self):
        args = ["-v", "--", "a"]
        match = run_match(args, "[-v] name")
        assert match is not None
        assert args == ["-v", "--", "a"]

    def test_tuple_args(self):
        match = Matcher(Options("--name= file")).match(("--name", "x", "y"))
        assert match is not None
        assert match["name"] == "x"
        assert match["file"] == "y"

    def test_empty_definition(self):
        match = run_match([], "")
        assert match is not None
        assert dict(match) == {"remaining": []}

        match = run_match(["a"], "")
        assert match is not None
        assert match["remaining"] == ["a"]

        assert run_match(["-a"], "") is None


class TestLogging:
    def test_unknown_option(self, internal_log):
        assert run_match(["--nope"], "[--force]") is None
        assert "no match: unknown option '--nope'" in internal_log.messages

    def test_wrong_type(self, internal_log):
        assert run_match(["--f"], "-f") is None
        assert "no match: wrong option type '--f'" in internal_log.messages

    def test_missing_argument(self, internal_log):
        assert run_match([], "name") is None
        assert "no match: no value for argument 'name'" in internal_log.messages

    def test_missing_option(self, internal_log):
        assert run_match([], "--force [-v]") is None
        assert "no match: missing options ['force']" in internal_log.messages
