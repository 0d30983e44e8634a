import random

import pytest

from chip8vm import Chip8


def assemble(*words):
    return b"".join(w.to_bytes(2, "big") for w in words)


@pytest.fixture
def make_vm():
    """Build an initialized VM running the given opcode words."""
    def _make(*words, seed=0):
        vm = Chip8(rng=random.Random(seed))
        vm.initialize()
        vm.load_program(assemble(*words))
        return vm
    return _make
