"""Console front-end tests — the loop is driven with in-memory streams."""

from __future__ import annotations

import io

from main import format_report, main, run_loop

from cn_numerals.pipeline import NumeralPipeline


class TestConsoleLoop:
    def test_prints_count_values_and_replacement(self):
        out = io.StringIO()
        run_loop(NumeralPipeline(), ["十一和二百五\n"], out)
        assert "提取了2个数字（11, 250）。替换之后的字符串：11和250" in out.getvalue()

    def test_exit_stops_the_loop(self):
        out = io.StringIO()
        processed = run_loop(NumeralPipeline(), ["一百二十三\n", "exit\n", "十一\n"], out)
        assert processed == 1
        assert "11" not in out.getvalue()

    def test_end_of_input_stops_the_loop(self):
        assert run_loop(NumeralPipeline(), ["三", "四"], io.StringIO()) == 2

    def test_line_without_numerals(self):
        report = NumeralPipeline().run("你好")
        assert format_report(report) == "提取了0个数字（）。替换之后的字符串：你好"


class TestMain:
    def test_arguments_mode(self, capsys):
        assert main(["负三点一四"]) == 0
        assert "-3.14" in capsys.readouterr().out
