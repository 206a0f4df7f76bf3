from __future__ import annotations

import pytest

from topic import PROMPT, is_help_request, prompt_for_topic, topic_from_args


class TestTopicFromArgs:
    @pytest.mark.parametrize("args", [
        ["Babe", "Ruth"],
        ["/topic:Babe", "Ruth"],
        ["--topic=Babe Ruth"],
        ["/topic", "Babe", "Ruth"],
        ["-topic", "Babe Ruth"],
        ["-topic=Babe", "Ruth"],
        ["Babe Ruth"],
    ])
    def test_equivalent_forms(self, args):
        assert topic_from_args(args) == "Babe_Ruth"

    def test_no_arguments(self):
        assert topic_from_args([]) == ""

    def test_empty_argument_anywhere(self):
        assert topic_from_args(["Babe", ""]) == ""
        assert topic_from_args(["", "--topic=Babe"]) == ""

    @pytest.mark.parametrize("flag", ["-topic", "--topic", "/topic"])
    def test_bare_flag_alone_has_no_topic(self, flag):
        assert topic_from_args([flag]) == ""

    @pytest.mark.parametrize("flag", ["-topic:", "--topic=", "/topic:"])
    def test_empty_inline_value_is_rejected(self, flag):
        assert topic_from_args([flag]) == ""
        assert topic_from_args([flag, "Ruth"]) == ""

    def test_embedded_value_alone(self):
        assert topic_from_args(["/topic:Python"]) == "Python"

    def test_embedded_value_with_inner_spaces(self):
        assert topic_from_args(["-topic:Monty Python and the Holy Grail"]) == (
            "Monty_Python_and_the_Holy_Grail"
        )

    def test_invalid_inline_value_is_a_plain_fragment(self):
        assert topic_from_args(["--topic=C++"]) == "--topic=C++"

    def test_non_ascii_inline_value_is_a_plain_fragment(self):
        assert topic_from_args(["--topic=Café"]) == "--topic=Café"

    def test_unknown_flag_is_a_plain_fragment(self):
        assert topic_from_args(["--title", "Babe"]) == "--title_Babe"

    def test_only_first_argument_is_a_flag(self):
        assert topic_from_args(["Babe", "/topic", "Ruth"]) == "Babe_/topic_Ruth"

    def test_order_is_kept(self):
        assert topic_from_args(["--topic", "New", "York", "City"]) == "New_York_City"


class TestIsHelpRequest:
    @pytest.mark.parametrize("arg", [
        "-h", "--h", "/h", "-help", "--help", "/help", "-?", "--?", "/?",
    ])
    def test_help_forms(self, arg):
        assert is_help_request([arg])

    def test_later_arguments_ignored(self):
        assert is_help_request(["--help", "Babe", "Ruth"])

    @pytest.mark.parametrize("args", [
        [], ["help"], ["-helpme"], ["Babe", "-h"], ["-topic"], ["h"],
    ])
    def test_not_help(self, args):
        assert not is_help_request(args)


class TestPromptForTopic:
    def test_replaces_spaces(self):
        assert prompt_for_topic(lambda _: "Babe Ruth") == "Babe_Ruth"

    def test_asks_again_on_empty_answer(self):
        answers = iter(["", "\n", "Python"])
        prompts = []

        def read(prompt):
            prompts.append(prompt)
            return next(answers)

        assert prompt_for_topic(read) == "Python"
        assert prompts == [PROMPT, PROMPT, PROMPT]

    def test_eof_propagates(self):
        def read(_):
            raise EOFError

        with pytest.raises(EOFError):
            prompt_for_topic(read)
