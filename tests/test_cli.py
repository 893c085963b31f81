import hashlib

import pytest

from treasure_board.cli import get_parser, hash_solution, main


def test_hash_solution_matches_sha256_of_bytes():
    assert hash_solution([0, 1, 200]) == hashlib.sha256(bytes([0, 1, 200])).hexdigest()


def test_hash_solution_rejects_values_above_a_byte():
    with pytest.raises(SystemExit):
        hash_solution([0, 256])


def test_hash_solution_command_prints_commitment(capsys):
    main(["hash-solution", "3", "1", "9"])
    assert capsys.readouterr().out.strip() == hashlib.sha256(bytes([3, 1, 9])).hexdigest()


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        get_parser().parse_args([])
