from dealmath.cli import main


class TestCLI:
    def test_flip_report(self, capsys):
        code = main([
            "flip", "--price", "200000", "--arv", "300000",
            "--rehab", "40000", "--months", "6",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Fix & Flip" in out
        assert "$15,900" in out

    def test_brrrr_report_has_phases_and_timeline(self, capsys):
        code = main([
            "brrrr", "--price", "150000", "--down", "20", "--rehab", "30000",
            "--rent", "2200", "--arv", "230000",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Phase 2 - Refinance" in out
        assert "$172,500" in out
        assert "Timeline" in out

    def test_rental_projections(self, capsys):
        code = main(["rental", "--price", "300000", "--rent", "2400", "--rate", "7"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Projections" in out

    def test_unknown_strategy_exits_2(self, capsys):
        code = main(["rental", "--price", "300000", "--rent", "2400", "--strategy", "timeshare"])
        assert code == 2
        assert "strategy" in capsys.readouterr().err
