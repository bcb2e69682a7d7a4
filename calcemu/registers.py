"""Editable text snapshot of the CPU register file."""

import re
from dataclasses import dataclass, field

_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")

REGISTER_COUNT = 16


def _parse_hex(text):
    """Read the leading hexadecimal number of text; 0 when there is none."""
    match = _HEX.match(text)
    if match is None:
        return 0
    sign, digits = match.groups()
    value = int(digits, 16)
    return -value if sign == "-" else value


@dataclass
class RegisterSnapshot:
    """Register values as hexadecimal text, as shown in an editor."""

    r: list = field(default_factory=lambda: ["00"] * REGISTER_COUNT)
    pc: str = "0000"
    lr: str = "0000"
    sp: str = "0000"
    ea: str = "0000"
    psw: str = "00"

    @classmethod
    def from_cpu(cls, cpu):
        """Capture the registers of cpu as text."""
        return cls(
            r=[f"{cpu.reg_r[i] & 0xFF:02x}" for i in range(REGISTER_COUNT)],
            pc=f"{cpu.reg_pc & 0xFFFF:04x}",
            lr=f"{cpu.reg_lr & 0xFFFF:04x}",
            sp=f"{cpu.reg_sp & 0xFFFF:04x}",
            ea=f"{cpu.reg_ea & 0xFFFF:04x}",
            psw=f"{cpu.reg_psw & 0xFFFF:02x}",
        )

    def apply_to(self, cpu):
        """Write the (possibly edited) values back; unreadable text becomes 0."""
        for i, text in enumerate(self.r[:REGISTER_COUNT]):
            cpu.reg_r[i] = _parse_hex(text) & 0xFF
        cpu.reg_pc = _parse_hex(self.pc) & 0xFFFF
        cpu.reg_lr = _parse_hex(self.lr) & 0xFFFF
        cpu.reg_ea = _parse_hex(self.ea) & 0xFFFF
        cpu.reg_sp = _parse_hex(self.sp) & 0xFFFF
        cpu.reg_psw = _parse_hex(self.psw) & 0xFFFF


def extended_registers(cpu):
    """Return the eight 16-bit ERn pairs built from R(n+1):Rn."""
    regs = cpu.reg_r
    return [((regs[i + 1] << 8) | regs[i]) & 0xFFFF for i in range(0, REGISTER_COUNT, 2)]