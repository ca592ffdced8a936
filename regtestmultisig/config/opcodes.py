# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Script opcode definitions
#    © 2026 October - 1200 Web Development <http://1200wd.com/>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Affero General Public License as
#    published by the Free Software Foundation, either version 3 of the
#    License, or (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import struct

# Only opcodes used to build multisig redeem scripts and witness programs
opcodes = {
    'OP_0': 0x00,
    'OP_PUSHDATA1': 0x4c,
    'OP_PUSHDATA2': 0x4d,
    'OP_PUSHDATA4': 0x4e,
    'OP_CHECKMULTISIG': 0xae,
}
opcodes.update({'OP_%d' % n: 0x50 + n for n in range(1, 17)})
opcodenames = {v: k for k, v in opcodes.items()}


def opcode(name, as_bytes=True):
    """
    Get integer or byte character value of OP code by name.

    >>> opcode('OP_CHECKMULTISIG')
    b'\\xae'

    :param name: Name of OP code as defined in opcodes
    :type name: str
    :param as_bytes: Return as byte or int? Default is bytes
    :type as_bytes: bool

    :return int, bytes:
    """
    opcode_int = opcodes[name]
    if as_bytes:
        return struct.pack('B', opcode_int)
    return opcode_int


def op_n(n, as_bytes=True):
    """
    Get small integer opcode OP_1 to OP_16 for number n

    :param n: Number between 1 and 16
    :type n: int
    :param as_bytes: Return as byte or int? Default is bytes
    :type as_bytes: bool

    :return int, bytes:
    """
    if not 1 <= n <= 16:
        raise ValueError("Small integer opcode only available for numbers 1 to 16, not %s" % n)
    return opcode('OP_%d' % n, as_bytes)
