# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Unit Tests for multisignature scripts and addresses
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

import unittest

from regtestmultisig.scripts import *
from regtestmultisig.keys import derive_accounts

# Public keys of private keys 1, 2 and 3
PUBKEY_1 = '0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798'
PUBKEY_2 = '02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5'
PUBKEY_3 = '02f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9'
PUBKEYS = [PUBKEY_1, PUBKEY_2, PUBKEY_3]


class TestScriptMultisig(unittest.TestCase):

    def test_multisig_redeemscript_2of3(self):
        expected = bytes.fromhex('52' + '21' + PUBKEY_1 + '21' + PUBKEY_2 + '21' + PUBKEY_3 + '53ae')
        self.assertEqual(expected, multisig_redeemscript(2, PUBKEYS))
        self.assertEqual(expected, multisig_redeemscript(2, [bytes.fromhex(k) for k in PUBKEYS]))

    def test_multisig_redeemscript_1of1_and_15(self):
        script = multisig_redeemscript(1, [PUBKEY_1])
        self.assertEqual('51' + '21' + PUBKEY_1 + '51ae', script.hex())
        script = multisig_redeemscript(15, [PUBKEY_1] * 15)
        self.assertEqual(b'\x5f', script[:1])
        self.assertEqual(b'\x5f\xae', script[-2:])

    def test_multisig_uncompressed_key(self):
        pubkey = '0479be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798483ada7726a3c4655da4fbfc0e1108a8' \
                 'fd17b448a68554199c47d08ffb10d4b8'
        script = multisig_redeemscript(1, [pubkey])
        self.assertEqual('5141' + pubkey + '51ae', script.hex())

    def test_multisig_order_sensitive(self):
        script1 = multisig_redeemscript(2, PUBKEYS)
        script2 = multisig_redeemscript(2, [PUBKEY_2, PUBKEY_1, PUBKEY_3])
        self.assertNotEqual(script1, script2)
        self.assertNotEqual(wrap_segwit(script1, 'regtest'), wrap_segwit(script2, 'regtest'))
        self.assertEqual(sorted(script1), sorted(script2))

    def test_multisig_invalid_threshold(self):
        for m in [0, 4, -1]:
            self.assertRaisesRegex(InvalidThreshold, "between 1 and 3", multisig_redeemscript, m, PUBKEYS)
        self.assertTrue(issubclass(InvalidThreshold, ScriptError))

    def test_multisig_invalid_keyset(self):
        self.assertRaisesRegex(InvalidKeySet, "Number of keys must be between 1 and 15, not 0",
                               multisig_redeemscript, 1, [])
        self.assertRaisesRegex(InvalidKeySet, "not 16", multisig_redeemscript, 1, [PUBKEY_1] * 16)
        self.assertRaisesRegex(InvalidKeySet, "Invalid public key", multisig_redeemscript, 1, ['0102'])
        self.assertRaisesRegex(InvalidKeySet, "Invalid public key", multisig_redeemscript, 1,
                               ['05' + PUBKEY_1[2:]])
        self.assertTrue(issubclass(InvalidKeySet, ScriptError))

    def test_multisig_keyset_checked_before_threshold(self):
        self.assertRaises(InvalidKeySet, multisig_redeemscript, 0, [])


class TestScriptSegwit(unittest.TestCase):

    def test_wrap_segwit_bip173(self):
        script = bytes.fromhex('21' + PUBKEY_1 + 'ac')
        self.assertEqual('tb1qrp33g0q5c5txsp9arysrx4k6zdkfs4nce4xj0gdcccefvpysxf3q0sl5k7',
                         wrap_segwit(script, 'testnet'))
        self.assertEqual('bc1qrp33g0q5c5txsp9arysrx4k6zdkfs4nce4xj0gdcccefvpysxf3qccfmv3',
                         wrap_segwit(script, 'bitcoin'))

    def test_wrap_segwit_regtest(self):
        script = multisig_redeemscript(2, PUBKEYS)
        address = wrap_segwit(script, 'regtest')
        self.assertTrue(address.startswith('bcrt1q'))
        self.assertEqual(sha256(script), addr_bech32_to_pubkeyhash(address, prefix='bcrt'))
        self.assertEqual(address, wrap_segwit(script, Network('regtest')))

    def test_wrap_segwit_empty(self):
        self.assertRaisesRegex(ScriptError, "empty redeem script", wrap_segwit, b'', 'regtest')

    def test_witness_program(self):
        script = bytes.fromhex('21' + PUBKEY_1 + 'ac')
        self.assertEqual('00201863143c14c5166804bd19203356da136c985678cd4d27a1b8c6329604903262',
                         witness_program(script).hex())


class TestScriptMultisigClass(unittest.TestCase):

    def test_multisig_script_class(self):
        ms = MultisigScript(2, PUBKEYS, network='regtest')
        self.assertEqual(3, ms.n)
        self.assertEqual(multisig_redeemscript(2, PUBKEYS), ms.redeemscript)
        self.assertEqual(wrap_segwit(ms.redeemscript, 'regtest'), ms.address)
        self.assertEqual(b'\0\x20' + sha256(ms.redeemscript), ms.witness_program)
        d = ms.as_dict()
        self.assertEqual(PUBKEYS, d['public_keys'])
        self.assertEqual('regtest', d['network'])
        self.assertEqual(ms.address, d['address'])

    def test_multisig_script_accounts(self):
        root = HDKey.from_seed('000102030405060708090a0b0c0d0e0f', network='regtest')
        accounts = derive_accounts(root, 3)
        ms1 = MultisigScript(2, accounts, network='regtest')
        ms2 = MultisigScript(2, [a.public_hex for a in accounts], network='regtest')
        ms3 = MultisigScript(2, [a.key for a in accounts], network='regtest')
        self.assertEqual(ms1.address, ms2.address)
        self.assertEqual(ms1.address, ms3.address)

    def test_multisig_script_to_string(self):
        ms = MultisigScript(2, PUBKEYS)
        self.assertEqual('OP_2 %s %s %s OP_3 OP_CHECKMULTISIG' % (PUBKEY_1, PUBKEY_2, PUBKEY_3),
                         script_to_string(ms.redeemscript))

    def test_script_to_string_malformed(self):
        self.assertRaisesRegex(ScriptError, "Malformed script", script_to_string, b'\x21\x02\x03')

    def test_data_pack(self):
        self.assertEqual(b'\x02\x01\x02', data_pack(b'\x01\x02'))
        self.assertEqual(b'\x4c\x50' + b'\x01' * 80, data_pack(b'\x01' * 80))
        self.assertEqual(b'\x4d\x00\x01' + b'\x01' * 256, data_pack(b'\x01' * 256))


if __name__ == '__main__':
    unittest.main()
