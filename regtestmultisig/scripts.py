# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    SCRIPTS - Multisignature redeem scripts and witness script hash addresses
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

from regtestmultisig.encoding import *
from regtestmultisig.config.opcodes import *
from regtestmultisig.keys import HDKey, Account
from regtestmultisig.networks import Network


_logger = logging.getLogger(__name__)


class ScriptError(Exception):
    """
    Handle Script class Exceptions

    """
    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


class InvalidThreshold(ScriptError):
    """
    Number of required signatures is not between 1 and the number of keys
    """
    pass


class InvalidKeySet(ScriptError):
    """
    Number of keys is not supported or a key is not a valid public key
    """
    pass


def data_pack(data):
    """
    Add data length prefix to data string to include data in a script

    :param data: Data to be packed
    :type data: bytes

    :return bytes:
    """
    if len(data) <= 75:
        return len(data).to_bytes(1, 'big') + data
    elif 75 < len(data) <= 255:
        return opcode('OP_PUSHDATA1') + len(data).to_bytes(1, 'little') + data
    else:
        return opcode('OP_PUSHDATA2') + len(data).to_bytes(2, 'little') + data


def _public_key_bytes(key):
    if isinstance(key, Account):
        key = key.public_byte
    elif isinstance(key, HDKey):
        key = key.public_byte
    elif isinstance(key, str):
        key = to_bytes(key)
    if not isinstance(key, bytes) or not \
            ((len(key) == 33 and key[:1] in [b'\2', b'\3']) or (len(key) == 65 and key[:1] == b'\4')):
        raise InvalidKeySet("Invalid public key %s, must be a 33 byte compressed or 65 byte uncompressed key" % key)
    return key


def multisig_redeemscript(sigs_required, public_keys):
    """
    Create a bare multisig script: OP_m <key 1> ... <key n> OP_n OP_CHECKMULTISIG

    Keys are used in the order provided, the order determines the resulting script and address.

    :param sigs_required: Number of signatures required to spend, the 'm' of m-of-n
    :type sigs_required: int
    :param public_keys: Ordered list of public keys as bytes, hex strings, HDKey or Account objects
    :type public_keys: list

    :return bytes: Redeem script
    """
    public_keys = [_public_key_bytes(k) for k in public_keys]
    if not 1 <= len(public_keys) <= MULTISIG_MAX_KEYS:
        raise InvalidKeySet("Number of keys must be between 1 and %d, not %d" %
                            (MULTISIG_MAX_KEYS, len(public_keys)))
    if not isinstance(sigs_required, int) or not 1 <= sigs_required <= len(public_keys):
        raise InvalidThreshold("Number of signatures required must be between 1 and %d, not %s" %
                               (len(public_keys), sigs_required))
    script = op_n(sigs_required)
    for key in public_keys:
        script += data_pack(key)
    return script + op_n(len(public_keys)) + opcode('OP_CHECKMULTISIG')


def witness_program(redeemscript):
    """
    Locking script of a pay-to-witness-script-hash output: OP_0 <sha256(redeemscript)>

    :param redeemscript: Redeem script, also called witness script
    :type redeemscript: bytes

    :return bytes:
    """
    return opcode('OP_0') + data_pack(sha256(redeemscript))


def wrap_segwit(redeemscript, network=DEFAULT_NETWORK):
    """
    Create native segwit P2WSH address for redeem script, a bech32 encoded witness program

    >>> script = bytes.fromhex('210279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798ac')
    >>> wrap_segwit(script, 'testnet')
    'tb1qrp33g0q5c5txsp9arysrx4k6zdkfs4nce4xj0gdcccefvpysxf3q0sl5k7'

    :param redeemscript: Redeem script
    :type redeemscript: bytes
    :param network: Network name or object, determines address prefix
    :type network: str, Network

    :return str: Bech32 address
    """
    if not redeemscript:
        raise ScriptError("Cannot create address for empty redeem script")
    network = Network(network)
    return pubkeyhash_to_addr_bech32(sha256(redeemscript), prefix=network.prefix_bech32, witver=0)


def script_to_string(script):
    """
    Human readable representation of script, with opcode names and hex data

    :param script: Raw script
    :type script: bytes

    :return str:
    """
    items = []
    pos = 0
    while pos < len(script):
        ch = script[pos]
        pos += 1
        if 1 <= ch <= 75:
            size = ch
        elif ch == opcodes['OP_PUSHDATA1']:
            size = script[pos]
            pos += 1
        elif ch == opcodes['OP_PUSHDATA2']:
            size = int.from_bytes(script[pos:pos + 2], 'little')
            pos += 2
        else:
            items.append(opcodenames.get(ch, 'OP_UNKNOWN_%d' % ch))
            continue
        if pos + size > len(script):
            raise ScriptError("Malformed script, data push of %d bytes exceeds script length" % size)
        items.append(script[pos:pos + size].hex())
        pos += size
    return ' '.join(items)


class MultisigScript(object):
    """
    An m-of-n multisignature script with its witness script hash address on a specific network.

    Public keys are kept in the order given, which is the order used in the redeem script.
    """

    def __init__(self, sigs_required, public_keys, network=DEFAULT_NETWORK):
        """
        Create multisig script and address. Raises InvalidThreshold or InvalidKeySet for invalid input.

        :param sigs_required: Number of signatures required
        :type sigs_required: int
        :param public_keys: Ordered list of public keys
        :type public_keys: list
        :param network: Network name or object
        :type network: str, Network
        """
        self.sigs_required = sigs_required
        self.public_keys = [_public_key_bytes(k) for k in public_keys]
        self.network = Network(network)
        self.redeemscript = multisig_redeemscript(sigs_required, self.public_keys)
        self.address = wrap_segwit(self.redeemscript, self.network)
        _logger.info("Created %d-of-%d P2WSH multisig address %s" % (self.sigs_required, self.n, self.address))

    def __repr__(self):
        return "<MultisigScript(%d-of-%d, address=%s, network=%s)>" % \
               (self.sigs_required, self.n, self.address, self.network.name)

    @property
    def n(self):
        return len(self.public_keys)

    @property
    def witness_program(self):
        return witness_program(self.redeemscript)

    def as_dict(self):
        return {
            'sigs_required': self.sigs_required,
            'public_keys': [k.hex() for k in self.public_keys],
            'network': self.network.name,
            'redeemscript': self.redeemscript.hex(),
            'witness_program': self.witness_program.hex(),
            'address': self.address,
        }
