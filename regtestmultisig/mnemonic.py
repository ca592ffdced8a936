# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    MNEMONIC class for BIP0039 Mnemonic Key management
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

import mnemonic as bip39
from regtestmultisig.encoding import *

_logger = logging.getLogger(__name__)


class EntropySourceError(Exception):
    """
    Raised when no random data can be read from the operating system
    """

    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


class Mnemonic(object):
    """
    Class to convert, generate and parse Mnemonic sentences

    Implementation of BIP0039 for Mnemonics passphrases. Wordlists and checksums are handled by the
    python-mnemonic library of Trezor, see https://github.com/trezor/python-mnemonic
    """

    def __init__(self, language=DEFAULT_LANGUAGE):
        """
        Init Mnemonic class and read wordlist of specified language

        :param language: use specific wordlist, i.e. english, french, italian, japanese or spanish. Leave empty for default 'english'
        :type language: str
        """
        self.language = language
        self._bip39 = bip39.Mnemonic(language)

    def generate(self, strength=DEFAULT_KEY_STRENGTH):
        """
        Generate a random Mnemonic key

        Uses cryptographically secure os.urandom() function to generate data. Then creates a Mnemonic sentence with
        the 'to_mnemonic' method.

        :param strength: Key strength in number of bits, one of 128, 160, 192, 224 or 256. Default is 256 bits
        :type strength: int

        :return str: Mnemonic passphrase consisting of a space seperated list of words
        """
        if strength not in SUPPORTED_KEY_STRENGTHS:
            raise ValueError("Strength should be one of %s bits, not %s" % (SUPPORTED_KEY_STRENGTHS, strength))
        try:
            data = os.urandom(strength // 8)
        except (NotImplementedError, OSError) as e:
            raise EntropySourceError("Could not read %d bits of random data from operating system: %s" %
                                     (strength, e))
        return self.to_mnemonic(data)

    def to_mnemonic(self, data):
        """
        Convert key data entropy to Mnemonic sentence

        >>> Mnemonic().to_mnemonic('28acfc94465fd2f6774759d6897ec122')
        'chunk gun celery million wood kite tackle twenty story episode raccoon dutch'

        :param data: Key data entropy
        :type data: bytes, hexstring

        :return str: Mnemonic passphrase consisting of a space seperated list of words
        """
        return normalize_string(self._bip39.to_mnemonic(to_bytes(data)))

    def to_entropy(self, words):
        """
        Convert Mnemonic words back to key data entropy. Raises ValueError if checksum is invalid

        :param words: Mnemonic words as string
        :type words: str

        :return bytes: Entropy seed
        """
        words = self.sanitize_mnemonic(words)
        if not self._bip39.check(words):
            raise ValueError("Invalid checksum for mnemonic sentence")
        return bytes(self._bip39.to_entropy(words))

    def sanitize_mnemonic(self, words):
        """
        Normalize list of words and check if all words are in the wordlist.

        :param words: List of space separated words
        :type words: str

        :return str: Sanitized list of words
        """
        words = normalize_string(words).split()
        for word in words:
            if word not in self._bip39.wordlist:
                raise ValueError("Unrecognised word %s in mnemonic sentence" % word)
        return ' '.join(words)

    def to_seed(self, words, password='', validate=True):
        """
        Use Mnemonic words and optionally a password to create a PBKDF2 seed (Password-Based Key Derivation Function 2)

        :param words: Mnemonic passphrase as string with space separated words
        :type words: str
        :param password: A password to protect key, leave empty to disable
        :type password: str
        :param validate: Validate checksum for given word phrase, default is True
        :type validate: bool

        :return bytes: PBKDF2 seed of 64 bytes
        """
        words = self.sanitize_mnemonic(words)
        if validate:
            self.to_entropy(words)
        return bytes(bip39.Mnemonic.to_seed(words, passphrase=password))


def new_seed(strength=DEFAULT_KEY_STRENGTH, password='', language=DEFAULT_LANGUAGE):
    """
    Generate a new mnemonic sentence and the corresponding seed

    :param strength: Entropy strength in bits
    :type strength: int
    :param password: Optional BIP39 passphrase
    :type password: str
    :param language: Wordlist language
    :type language: str

    :return tuple: (mnemonic sentence, seed bytes)
    """
    mnemo = Mnemonic(language)
    words = mnemo.generate(strength)
    _logger.info("Generated new mnemonic sentence with %d bits of entropy" % strength)
    return words, mnemo.to_seed(words, password)
