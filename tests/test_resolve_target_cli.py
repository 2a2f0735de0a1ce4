import sys
from pathlib import Path

import lief
import pytest

from scripts import resolve_target as cli


@pytest.fixture
def elf_binary() -> Path:
    path = Path(sys.executable).resolve()
    if not isinstance(lief.parse(str(path)), lief.ELF.Binary):
        pytest.skip("CLI tests need an ELF interpreter binary")
    return path


def test_resolves_offset_literal(elf_binary, tmp_path, capsys) -> None:
    code = cli.main([str(elf_binary), "+0", "--config", str(tmp_path / "settings.json")])

    out = capsys.readouterr().out
    assert code == 0
    assert "Offset:      +000000" in out


def test_unresolved_target_exits_nonzero(elf_binary, tmp_path, capsys) -> None:
    code = cli.main([str(elf_binary), "NO_SUCH_LABEL_HERE", "--config", str(tmp_path / "settings.json")])

    assert code == 1
    assert "label-not-found" in capsys.readouterr().out


def test_bad_anchor_is_rejected(elf_binary, tmp_path) -> None:
    with pytest.raises(SystemExit):
        cli.main([str(elf_binary), "+0", "--anchor", "zz", "--config", str(tmp_path / "settings.json")])
