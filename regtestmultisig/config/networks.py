# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Network Definitions
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

# Network, HD key version bytes, bech32 human readable part, cointype and default RPC port
NETWORK_BITCOIN = 'bitcoin'
NETWORK_BITCOIN_TESTNET = 'testnet'
NETWORK_BITCOIN_REGTEST = 'regtest'
NETWORK_DEFINITIONS = {
    NETWORK_BITCOIN: {
        'description': 'Bitcoin',
        'currency_code': 'BTC',
        'prefix_hdkey_private': '0488ADE4',
        'prefix_hdkey_public': '0488B21E',
        'prefix_bech32': 'bc',
        'bip44_cointype': 0,
        'rpc_port': 8332,
        'cli_flag': '',
    },
    NETWORK_BITCOIN_TESTNET: {
        'description': 'Bitcoin Test Network 3',
        'currency_code': 'TBTC',
        'prefix_hdkey_private': '04358394',
        'prefix_hdkey_public': '043587CF',
        'prefix_bech32': 'tb',
        'bip44_cointype': 1,
        'rpc_port': 18332,
        'cli_flag': '-testnet',
    },
    NETWORK_BITCOIN_REGTEST: {
        'description': 'Bitcoin Regression Test Network',
        'currency_code': 'RBTC',
        'prefix_hdkey_private': '04358394',
        'prefix_hdkey_public': '043587CF',
        'prefix_bech32': 'bcrt',
        'bip44_cointype': 1,
        'rpc_port': 18443,
        'cli_flag': '-regtest',
    },
}
