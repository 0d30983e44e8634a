from chip8vm.__main__ import main


class TestMain:

    def test_usage(self, capsys):
        assert main([]) == 1
        assert "Usage" in capsys.readouterr().out

    def test_oversized_rom(self, tmp_path, capsys):
        rom = tmp_path / "BIG"
        rom.write_bytes(bytes(4000))
        assert main([str(rom)]) == 1
        out = capsys.readouterr().out
        assert "Emulation error" in out and "4000" in out

    def test_missing_rom(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope")]) == 1
        assert "Emulation error" in capsys.readouterr().out
