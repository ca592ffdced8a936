# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Hierarchical Deterministic Key derivation for multisignature cosigners
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

import hmac
from copy import deepcopy
from regtestmultisig.networks import Network, network_by_hdkey_prefix
from regtestmultisig.config.secp256k1 import *
from regtestmultisig.encoding import *

USE_FASTECDSA = os.getenv("USE_FASTECDSA") not in ["false", "False", "0", "FALSE"]
if USE_FASTECDSA:
    try:
        from fastecdsa.curve import secp256k1 as fastecdsa_secp256k1
        from fastecdsa import keys as fastecdsa_keys
    except ImportError:
        USE_FASTECDSA = False
if not USE_FASTECDSA:
    import ecdsa

    secp256k1_curve = ecdsa.ellipticcurve.CurveFp(secp256k1_p, secp256k1_a, secp256k1_b)
    secp256k1_generator = ecdsa.ellipticcurve.Point(secp256k1_curve, secp256k1_Gx, secp256k1_Gy, secp256k1_n)

_logger = logging.getLogger(__name__)
if not USE_FASTECDSA:
    _logger.warning("Could not include fastecdsa library, using slower ecdsa instead. ")


class BKeyError(Exception):
    """
    Handle Key class Exceptions

    """

    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


class InvalidDerivationPath(BKeyError):
    """
    Derivation path is malformed, contains an index out of range or a non-hardened level where a hardened level
    is required
    """
    pass


def ec_point(m):
    """
    Method for elliptic curve multiplication on the secp256k1 curve. Multiply Generator point G with m

    :param m: A scalar between 1 and secp256k1_n - 1
    :type m: int

    :return tuple: x and y coordinate of resulting point
    """
    m = int(m)
    if USE_FASTECDSA:
        point = fastecdsa_keys.get_public_key(m, fastecdsa_secp256k1)
        return point.x, point.y
    else:
        point = secp256k1_generator
        point *= m
        return point.x(), point.y()


def parse_path(path):
    """
    Parse a BIP32 key path into a list of (index, hardened) tuples. The leading 'm' is optional.

    >>> parse_path("m/48'/1'/0'/2'")
    [(48, True), (1, True), (0, True), (2, True)]

    :param path: Key path as string or list of path levels
    :type path: str, list

    :return list:
    """
    if isinstance(path, TYPE_TEXT):
        path = path.split("/")
    if path and path[0] in ['m', 'M']:
        path = path[1:]
    levels = []
    for item in path:
        item = str(item).strip()
        if not item:
            raise InvalidDerivationPath("Could not parse path. Index is empty.")
        hardened = item[-1] in "'HhPp"
        if hardened:
            item = item[:-1]
        try:
            index = int(item)
        except ValueError:
            raise InvalidDerivationPath("Could not parse path. Index '%s' is not a number." % item)
        if index < 0 or index >= HARDENED_OFFSET:
            raise InvalidDerivationPath("Index %d out of range, must be between 0 and %d" %
                                        (index, HARDENED_OFFSET - 1))
        levels.append((index, hardened))
    return levels


def path_expand(path_template, cosigner_id=0, network=DEFAULT_NETWORK):
    """
    Fill in cosigner ID and coin type in a key path template

    >>> path_expand("m/48'/{coin_type}'/{cosigner}'/2'", cosigner_id=2, network='regtest')
    "m/48'/1'/2'/2'"

    :param path_template: Key path with {coin_type} and {cosigner} placeholders
    :type path_template: str
    :param cosigner_id: Cosigner branch index
    :type cosigner_id: int
    :param network: Network name, used to determine BIP44 coin type
    :type network: str, Network

    :return str:
    """
    network = Network(network)
    try:
        return path_template.format(coin_type=network.bip44_cointype, cosigner=cosigner_id)
    except (KeyError, IndexError, ValueError) as e:
        raise InvalidDerivationPath("Invalid key path template %s: %s" % (path_template, e))


class HDKey(object):
    """
    Class for Hierarchical Deterministic keys as defined in BIP0032

    Besides a private or public key a HD Key has a chain code, allowing to create
    a structure of related keys.
    """

    @staticmethod
    def from_seed(import_seed, network=DEFAULT_NETWORK):
        """
        Create master key from seed, as defined in BIP0032

        >>> HDKey.from_seed('000102030405060708090a0b0c0d0e0f', network='bitcoin').wif_public()
        'xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8'

        :param import_seed: Private key seed as bytes or hexstring
        :type import_seed: str, bytes
        :param network: Network to use
        :type network: str, Network

        :return HDKey:
        """
        seed = to_bytes(import_seed)
        i = hmac.new(b"Bitcoin seed", seed, hashlib.sha512).digest()
        key = i[:32]
        chain = i[32:]
        key_int = int.from_bytes(key, 'big')
        if not 0 < key_int < secp256k1_n:
            raise BKeyError("Invalid seed, key int value must be between 1 and secp256k1_n")
        return HDKey(key=key, chain=chain, network=network)

    @staticmethod
    def from_wif(wif, network=None):
        """
        Import extended private or public key in BIP0032 serialization format

        :param wif: Extended key, i.e. xpub, xprv, tpub or tprv
        :type wif: str
        :param network: Network name, derived from key prefix if not specified
        :type network: str, Network

        :return HDKey:
        """
        try:
            raw = base58check_decode(wif)
        except EncodingError as e:
            raise BKeyError("Invalid extended key %s: %s" % (wif, e))
        if len(raw) != 78:
            raise BKeyError("Invalid extended key length %d, expected 78 bytes" % len(raw))
        networks = network_by_hdkey_prefix(raw[:4])
        if not networks:
            raise BKeyError("Unknown extended key version prefix %s" % raw[:4].hex())
        if network is None:
            network = networks[0]
        network = Network(network)
        if network.name not in networks:
            raise BKeyError("Extended key is from network %s not %s" % (networks, network.name))
        is_private = raw[:4] == network.prefix_hdkey_private
        key = raw[45:]
        if is_private:
            if key[:1] != b'\0':
                raise BKeyError("Invalid private extended key, expected zero byte before key")
            key = key[1:]
        return HDKey(key=key, chain=raw[13:45], depth=raw[4], parent_fingerprint=raw[5:9],
                     child_index=int.from_bytes(raw[9:13], 'big'), is_private=is_private, network=network)

    def __init__(self, key, chain, depth=0, parent_fingerprint=b'\0\0\0\0', child_index=0, is_private=True,
                 network=DEFAULT_NETWORK):
        """
        Hierarchical Deterministic Key class init function.

        :param key: Private key (32 bytes) or compressed public key (33 bytes)
        :type key: bytes
        :param chain: A chain code (32 bytes)
        :type chain: bytes
        :param depth: Level of depth in BIP32 key path
        :type depth: int
        :param parent_fingerprint: 4-byte fingerprint of parent
        :type parent_fingerprint: bytes
        :param child_index: Index number of child as integer, including hardened offset
        :type child_index: int
        :param is_private: True for private, False for public key. Default is True
        :type is_private: bool
        :param network: Network name or object
        :type network: str, Network
        """
        if len(chain) != 32:
            raise BKeyError("Chain code must be 32 bytes, not %d" % len(chain))
        self.chain = chain
        self.depth = depth
        self.parent_fingerprint = parent_fingerprint
        self.child_index = child_index
        self.is_private = is_private
        self.network = Network(network)
        self.secret = None
        self.private_byte = None
        if is_private:
            if len(key) != 32:
                raise BKeyError("Private key must be 32 bytes, not %d" % len(key))
            self.secret = int.from_bytes(key, 'big')
            if not 0 < self.secret < secp256k1_n:
                raise BKeyError("Private key must be between 1 and secp256k1_n")
            self.private_byte = key
            x, y = ec_point(self.secret)
            self.public_byte = (b'\3' if y % 2 else b'\2') + x.to_bytes(32, 'big')
        else:
            if len(key) != 33 or key[:1] not in [b'\2', b'\3']:
                raise BKeyError("Public key must be a compressed public key of 33 bytes")
            self.public_byte = key
        self._hash160 = None

    def __repr__(self):
        return "<HDKey(public_hex=%s, wif_public=%s, network=%s)>" % \
               (self.public_hex, self.wif_public(), self.network.name)

    def __str__(self):
        return self.public_hex

    def __eq__(self, other):
        if other is None or not isinstance(other, HDKey):
            return False
        return self.public_byte == other.public_byte and self.chain == other.chain and \
            self.private_byte == other.private_byte

    def __hash__(self):
        return hash(self.public_byte + self.chain)

    @property
    def public_hex(self):
        return self.public_byte.hex()

    @property
    def hash160(self):
        if not self._hash160:
            self._hash160 = hash160(self.public_byte)
        return self._hash160

    @property
    def fingerprint(self):
        """
        Get key fingerprint: the first four bytes of the hash160 of this key.

        :return bytes:
        """
        return self.hash160[:4]

    def _key_derivation(self, data):
        i = hmac.new(self.chain, data, hashlib.sha512).digest()
        key_int = int.from_bytes(i[:32], 'big')
        if key_int >= secp256k1_n:
            raise BKeyError("Key cannot be greater than secp256k1_n. Try another index number.")
        return key_int, i[32:]

    def child_private(self, index=0, hardened=False):
        """
        Use Child Key Derivation (CDK) to derive child private key of current HD Key object.

        :param index: Key index number, without hardened offset
        :type index: int
        :param hardened: Specify if key must be hardened (True) or normal (False)
        :type hardened: bool

        :return HDKey: HD Key class object
        """
        if not self.is_private:
            raise BKeyError("Need a private key to create child private key")
        if not 0 <= index < HARDENED_OFFSET:
            raise InvalidDerivationPath("Index %d out of range, must be between 0 and %d" %
                                        (index, HARDENED_OFFSET - 1))
        if hardened:
            index |= HARDENED_OFFSET
            data = b'\0' + self.private_byte + index.to_bytes(4, 'big')
        else:
            data = self.public_byte + index.to_bytes(4, 'big')
        key_int, chain = self._key_derivation(data)
        newkey = (key_int + self.secret) % secp256k1_n
        if newkey == 0:
            raise BKeyError("Key cannot be zero. Try another index number.")
        return HDKey(key=newkey.to_bytes(32, 'big'), chain=chain, depth=self.depth + 1,
                     parent_fingerprint=self.fingerprint, child_index=index, network=self.network)

    def subkey_for_path(self, path, hardened_only=False):
        """
        Determine subkey for HD Key for given path.

        >>> k = HDKey.from_seed('000102030405060708090a0b0c0d0e0f', network='bitcoin')
        >>> k.subkey_for_path("m/0'").wif_public()
        'xpub68Gmy5EdvgibQVfPdqkBBCHxA5htiqg55crXYuXoQRKfDBFA1WEjWgP6LHhwBZeNK1VTsfTFUHCdrfp1bgwQ9xv5ski8PX9rL2dZXvgGDnw'

        :param path: BIP0032 key path
        :type path: str, list
        :param hardened_only: Raise InvalidDerivationPath if a path level is not hardened
        :type hardened_only: bool

        :return HDKey: HD Key class object of subkey
        """
        key = self
        for index, hardened in parse_path(path):
            if hardened_only and not hardened:
                raise InvalidDerivationPath("Path %s contains non-hardened index %d, only hardened derivation "
                                            "is allowed" % (path, index))
            key = key.child_private(index=index, hardened=hardened)
        return key

    def public(self):
        """
        Public version of current private key. Strips all private information from HDKey object, returns deepcopy
        version of current object

        :return HDKey:
        """
        hdkey = deepcopy(self)
        hdkey.is_private = False
        hdkey.secret = None
        hdkey.private_byte = None
        return hdkey

    def wif(self, is_private=False):
        """
        Get Extended WIF of current key in BIP0032 serialization format

        :param is_private: Return private key, only possible if this key has private key data
        :type is_private: bool

        :return str: Base58 encoded WIF key
        """
        if is_private and not self.is_private:
            raise BKeyError("Cannot export private extended key of public key")
        if is_private:
            rkey = b'\0' + self.private_byte
        else:
            rkey = self.public_byte
        raw = self.network.wif_prefix(is_private) + self.depth.to_bytes(1, 'big') + self.parent_fingerprint + \
            self.child_index.to_bytes(4, 'big') + self.chain + rkey
        return base58check_encode(raw)

    def wif_public(self):
        return self.wif(is_private=False)

    def wif_private(self):
        return self.wif(is_private=True)


class Account(object):
    """
    Cosigner account key of a multisignature setup, derived from the master key with only hardened levels
    """

    def __init__(self, cosigner_id, path, key):
        self.cosigner_id = cosigner_id
        self.path = path
        self.key = key

    def __repr__(self):
        return "<Account(cosigner_id=%d, path=%s, public_hex=%s)>" % (self.cosigner_id, self.path,
                                                                      self.key.public_hex)

    @property
    def public_byte(self):
        return self.key.public_byte

    @property
    def public_hex(self):
        return self.key.public_hex

    @property
    def fingerprint(self):
        return self.key.fingerprint


def derive_accounts(root, count=DEFAULT_COSIGNER_COUNT, base_path=KEY_PATH_MULTISIG_ACCOUNT):
    """
    Derive cosigner accounts from a master key. Every cosigner gets its own branch index in the path
    template, starting at 0. All path levels must be hardened, so a leaked extended public key can not be
    used to find the private key of the parent.

    :param root: Master private key
    :type root: HDKey
    :param count: Number of cosigner accounts to derive
    :type count: int
    :param base_path: Path template with {cosigner} and optional {coin_type} placeholders
    :type base_path: str

    :return list of Account:
    """
    if count < 1:
        raise ValueError("Number of accounts must be 1 or more, not %d" % count)
    if '{cosigner}' not in base_path:
        raise InvalidDerivationPath("Key path template %s has no {cosigner} branch" % base_path)
    accounts = []
    for cosigner_id in range(count):
        path = path_expand(base_path, cosigner_id, root.network)
        key = root.subkey_for_path(path, hardened_only=True)
        _logger.info("Derived account for cosigner %d at path %s: %s" % (cosigner_id, path, key.public_hex))
        accounts.append(Account(cosigner_id, path, key))
    return accounts


def neutered_export(account):
    """
    Public only extended key of account in BIP0032 serialization. Use this to export or share cosigner keys.

    :param account: Cosigner account or HD key
    :type account: Account, HDKey

    :return str: xpub / tpub
    """
    key = account.key if isinstance(account, Account) else account
    return key.public().wif_public()
