# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    ENCODING - Methods for encoding and conversion
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

import hashlib
import unicodedata
from Crypto.Hash import RIPEMD160
from regtestmultisig.main import *
_logger = logging.getLogger(__name__)


class EncodingError(Exception):
    """ Log and raise encoding errors """
    def __init__(self, msg=''):
        self.msg = msg

    def __str__(self):
        return self.msg


code_strings = {
    2: b'01',
    10: b'0123456789',
    16: b'0123456789abcdef',
    58: b'123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz',
    'bech32': b'qpzry9x8gf2tvdw0s3jn54khce6mua7l'
}


def _array_to_codestring(array, base):
    codebase = code_strings[base]
    codestring = ""
    for i in array:
        codestring += chr(codebase[i])
    return codestring


def _codestring_to_array(codestring, base):
    codestring = bytes(codestring, 'utf8')
    codebase = code_strings[base]
    array = []
    for s in codestring:
        try:
            array.append(codebase.index(s))
        except ValueError:
            raise EncodingError("Character '%s' not found in codebase" % chr(s))
    return array


def change_base(chars, base_from, base_to, min_length=0):
    """
    Convert input chars from one numeric base to another. For instance from hexadecimal (base-16) to decimal (base-10)

    Supported bases are 2, 10, 16, 58 and 256 (bytes). Leading zero bytes are kept as leading '1' characters when
    converting between bytes and base58, as is common for bitcoin keys and addresses.

    >>> change_base('FF', 16, 10)
    255
    >>> change_base(b'\\x00\\x01', 256, 58)
    '12'

    :param chars: Input string, bytes or integer
    :type chars: str, bytes, int
    :param base_from: Base number of input. For example 2 for binary, 10 for decimal and 16 for hexadecimal
    :type base_from: int
    :param base_to: Base number for output.
    :type base_to: int
    :param min_length: Minimal output length, output is padded with zero characters or bytes
    :type min_length: int

    :return str, bytes, int: Base converted input
    """
    if base_from not in [2, 10, 16, 58, 256] or base_to not in [2, 10, 16, 58, 256]:
        raise EncodingError("Conversion from base %s to base %s not supported" % (base_from, base_to))

    leading_zeros = 0
    if base_from == 10:
        input_dec = int(chars)
    elif base_from == 256:
        if not isinstance(chars, bytes):
            raise EncodingError("Bytes input expected for base 256, not %s" % type(chars).__name__)
        input_dec = int.from_bytes(chars, 'big')
        leading_zeros = len(chars) - len(chars.lstrip(b'\0'))
    else:
        if isinstance(chars, bytes):
            chars = chars.decode()
        if base_from == 16:
            chars = chars.lower()
        input_dec = 0
        for pos in _codestring_to_array(chars, base_from):
            input_dec = input_dec * base_from + pos
        leading_zeros = len(chars) - len(chars.lstrip(chr(code_strings[base_from][0])))

    if base_to == 10:
        return input_dec
    if base_to == 256:
        output = input_dec.to_bytes((input_dec.bit_length() + 7) // 8, 'big')
        if base_from == 58:
            output = b'\0' * leading_zeros + output
        return output.rjust(min_length, b'\0')

    output = []
    while input_dec:
        input_dec, remainder = divmod(input_dec, base_to)
        output.insert(0, remainder)
    output = _array_to_codestring(output, base_to)
    zero = chr(code_strings[base_to][0])
    if base_from == 256 and base_to == 58:
        output = zero * leading_zeros + output
    if base_to == 16 and len(output) % 2:
        output = zero + output
    return output.rjust(min_length, zero)


def base58check_encode(data):
    """
    Encode bytes as base58 string with 4 bytes double SHA256 checksum

    :param data: Data to encode, including version prefix
    :type data: bytes

    :return str:
    """
    return change_base(data + double_sha256(data)[:4], 256, 58)


def base58check_decode(b58):
    """
    Decode base58 string and verify and remove checksum

    :param b58: Base58 encoded string with checksum
    :type b58: str

    :return bytes:
    """
    data = change_base(b58, 58, 256)
    if len(data) < 5:
        raise EncodingError("Base58 string too short to contain a checksum")
    if double_sha256(data[:-4])[:4] != data[-4:]:
        raise EncodingError("Invalid base58 checksum for %s" % b58)
    return data[:-4]


def addr_bech32_to_pubkeyhash(bech, prefix=None, include_witver=False, as_hex=False):
    """
    Decode bech32 / segwit address to public key hash or witness program

    >>> addr_bech32_to_pubkeyhash('bc1qy8qmc6262m68ny0ftlexs4h9paud8sgce3sf84', as_hex=True)
    '21c1bc695a56f47991e95ff26856e50f78d3c118'

    Validate the bech32 string, and determine HRP and data. Only standard data size of 20 and 32 bytes are excepted

    :param bech: Bech32 address to convert
    :type bech: str
    :param prefix: Address prefix called Human-readable part. Default is None and tries to derive prefix, for bitcoin specify 'bc', for testnet 'tb' and for regtest 'bcrt'
    :type prefix: str
    :param include_witver: Include witness version in output? Default is False
    :type include_witver: bool
    :param as_hex: Output public key hash as hex or bytes. Default is False
    :type as_hex: bool

    :return str, bytes: Public Key Hash
    """
    if (any(ord(x) < 33 or ord(x) > 126 for x in bech)) or (bech.lower() != bech and bech.upper() != bech):
        raise EncodingError("Invalid bech32 character in bech string")
    bech = bech.lower()
    pos = bech.rfind('1')
    if pos < 1 or pos + 7 > len(bech) or len(bech) > 90:
        raise EncodingError("Invalid bech32 string length")
    if prefix and prefix != bech[:pos]:
        raise EncodingError("Invalid bech32 address. Prefix '%s', prefix expected is '%s'" % (bech[:pos], prefix))
    hrp = bech[:pos]
    data = _codestring_to_array(bech[pos + 1:], 'bech32')
    if not _bech32_polymod(_bech32_hrp_expand(hrp) + data) == 1:
        raise EncodingError("Bech polymod check failed")
    data = data[:-6]
    decoded = convertbits(data[1:], 5, 8, pad=False)
    if decoded is None or len(decoded) < 2 or len(decoded) > 40:
        raise EncodingError("Invalid decoded data length, must be between 2 and 40")
    decoded = bytes(decoded)
    if data[0] > 16:
        raise EncodingError("Invalid witness version %d" % data[0])
    if data[0] == 0 and len(decoded) not in [20, 32]:
        raise EncodingError("Invalid decoded data length, must be 20 or 32 bytes")
    witver = b''
    if include_witver:
        witver = bytes([data[0] + 0x50 if data[0] else 0, len(decoded)])
    if as_hex:
        return (witver + decoded).hex()
    return witver + decoded


def pubkeyhash_to_addr_bech32(pubkeyhash, prefix='bc', witver=0, separator='1'):
    """
    Encode public key hash or script hash as bech32 encoded (segwit) address

    >>> pubkeyhash_to_addr_bech32('21c1bc695a56f47991e95ff26856e50f78d3c118')
    'bc1qy8qmc6262m68ny0ftlexs4h9paud8sgce3sf84'

    Format of address is prefix/hrp + seperator + bech32 address + checksum

    For more information see BIP173 proposal at https://github.com/bitcoin/bips/blob/master/bip-0173.mediawiki

    :param pubkeyhash: Public key hash (20 bytes) or script hash (32 bytes)
    :type pubkeyhash: str, bytes
    :param prefix: Address prefix or Human-readable part. Default is 'bc' an abbreviation of Bitcoin. Use 'tb' for testnet and 'bcrt' for regtest.
    :type prefix: str
    :param witver: Witness version between 0 and 16
    :type witver: int
    :param separator: Separator char between hrp and data, should always be left to '1' otherwise its not standard.
    :type separator: str

    :return str: Bech32 encoded address
    """
    pubkeyhash = list(to_bytes(pubkeyhash))
    if witver == 0 and len(pubkeyhash) not in [20, 32]:
        raise EncodingError("Witness program of version 0 must be 20 or 32 bytes, not %d" % len(pubkeyhash))
    data = [witver] + convertbits(pubkeyhash, 8, 5)
    polymod = _bech32_polymod(_bech32_hrp_expand(prefix) + data + [0, 0, 0, 0, 0, 0]) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    return prefix + separator + _array_to_codestring(data, 'bech32') + _array_to_codestring(checksum, 'bech32')


def _bech32_hrp_expand(hrp):
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def _bech32_polymod(values):
    """
    Internal function that computes the Bech32 checksum
    """
    generator = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1ffffff) << 5 ^ value
        for i in range(5):
            chk ^= generator[i] if ((top >> i) & 1) else 0
    return chk


def convertbits(data, frombits, tobits, pad=True):
    """
    'General power-of-2 base conversion'

    Source: https://github.com/sipa/bech32/tree/master/ref/python

    :param data: Data values to convert
    :type data: list, bytes
    :param frombits: Number of bits in source data
    :type frombits: int
    :param tobits: Number of bits in result data
    :type tobits: int
    :param pad: Use padding zero's or not. Default is True
    :type pad: bool

    :return list: Converted values
    """
    acc = 0
    bits = 0
    ret = []
    maxv = (1 << tobits) - 1
    max_acc = (1 << (frombits + tobits - 1)) - 1
    for value in data:
        if value < 0 or (value >> frombits):
            return None
        acc = ((acc << frombits) | value) & max_acc
        bits += frombits
        while bits >= tobits:
            bits -= tobits
            ret.append((acc >> bits) & maxv)
    if pad:
        if bits:
            ret.append((acc << (tobits - bits)) & maxv)
    elif bits >= frombits or ((acc << (tobits - bits)) & maxv):
        return None
    return ret


def to_bytes(string, unhexlify=True):
    """
    Convert string, hexadecimal string to bytes

    :param string: String to convert
    :type string: str, bytes
    :param unhexlify: Try to unhexlify hexstring
    :type unhexlify: bool

    :return: Bytes var
    """
    if not string:
        return b''
    if isinstance(string, bytes):
        return string
    if unhexlify:
        try:
            return bytes.fromhex(string)
        except (TypeError, ValueError):
            pass
    return bytes(string, 'utf8')


def to_hexstring(string):
    """
    Convert bytes, string to a hexadecimal string. Use instead of built-in hex() method if format
    of input string is not known.

    >>> to_hexstring(b'\\x12\\xaa\\xdd')
    '12aadd'

    :param string: Variable to convert to hex string
    :type string: bytes, str

    :return: hexstring
    """
    if not string:
        return ''
    try:
        bytes.fromhex(string)
        return string
    except (ValueError, TypeError):
        pass
    if not isinstance(string, bytes):
        string = bytes(string, 'utf8')
    return string.hex()


def normalize_string(string):
    """
    Normalize a string to the default NFKD unicode format
    See https://en.wikipedia.org/wiki/Unicode_equivalence#Normalization

    :param string: string value
    :type string: bytes, str

    :return: string
    """
    if isinstance(string, bytes):
        utxt = string.decode('utf8')
    elif isinstance(string, TYPE_TEXT):
        utxt = string
    else:
        raise TypeError("String value expected")
    return unicodedata.normalize('NFKD', utxt)


def sha256(string):
    return hashlib.sha256(string).digest()


def double_sha256(string, as_hex=False):
    """
    Get double SHA256 hash of string

    :param string: String to be hashed
    :type string: bytes
    :param as_hex: Return value as hexadecimal string. Default is False
    :type as_hex: bool

    :return bytes, str:
    """
    if not as_hex:
        return hashlib.sha256(hashlib.sha256(string).digest()).digest()
    else:
        return hashlib.sha256(hashlib.sha256(string).digest()).hexdigest()


def hash160(string):
    """
    Creates a RIPEMD-160 + SHA256 hash of the input string

    RIPEMD-160 is taken from pycryptodome, as it is not available in all OpenSSL builds used by hashlib.

    :param string: Public key or script
    :type string: bytes

    :return bytes: RIPEMD-160 hash of script
    """
    return RIPEMD160.new(hashlib.sha256(string).digest()).digest()
