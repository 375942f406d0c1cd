import pytest

from hackvm import translate_text
from hack_cpu import HackCPU

# SP, LCL, ARG, THIS, THAT
DEFAULT_RAM = {0: 256, 1: 300, 2: 400, 3: 3000, 4: 3010}


@pytest.fixture
def run_vm():
    def _run(source: str, ram=None, unit: str = "Test") -> HackCPU:
        state = dict(DEFAULT_RAM)
        state.update(ram or {})
        return HackCPU(translate_text(source, unit), ram=state).run()
    return _run
