# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#
#    BOOTSTRAP MULTISIG - Command line tool
#    Create a 2-of-3 segwit multisig address on a regtest node, fund it and create some transaction history
#
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

import sys
import argparse
from decimal import Decimal
from regtestmultisig.main import RTM_VERSION, add_console_logging
from regtestmultisig.config.config import *
from regtestmultisig.bootstrap import MultisigBootstrap, BootstrapConfig
from regtestmultisig.services.bitcoind import BitcoindClient, TRANSPORTS


# Show all errors in simple format without tracelog
def exception_handler(exception_type, exception, traceback):
    print("%s: %s" % (exception_type.__name__, exception), file=sys.stderr)


def parse_args(args=None):
    parser = argparse.ArgumentParser(description='Bootstrap a multisignature wallet environment on a bitcoind '
                                                 'regtest node')
    group_node = parser.add_argument_group("Node")
    group_node.add_argument('--host', default=DEFAULT_RPC_HOST,
                            help="Hostname or IP address of bitcoind node. Default is %s" % DEFAULT_RPC_HOST)
    group_node.add_argument('--port', '-p', type=int, default=None,
                            help="RPC port of node. Default is the port of the selected network")
    group_node.add_argument('--rpcuser', '-u', default=DEFAULT_RPC_USER, help="RPC username")
    group_node.add_argument('--rpcpassword', '-P', default=DEFAULT_RPC_PASSWORD, help="RPC password")
    group_node.add_argument('--wallet-name', '-w', default=DEFAULT_WALLET_NAME,
                            help="Name of node wallet used for mining and funding. Default is %s" %
                                 DEFAULT_WALLET_NAME)
    group_node.add_argument('--network', '-n', default=DEFAULT_NETWORK,
                            help="Network name, only 'regtest' is supported")
    group_node.add_argument('--transport', '-t', default=DEFAULT_TRANSPORT, choices=list(TRANSPORTS.keys()),
                            help="Use bitcoin-cli program (cli) or JSON-RPC over http (http) to connect to node")
    group_node.add_argument('--cli-path', default=BITCOIN_CLI_PATH, help="Path to bitcoin-cli program")
    group_node.add_argument('--timeout', type=int, default=TIMEOUT_REQUESTS,
                            help="Timeout in seconds for a single node command")
    group_node.add_argument('--max-attempts', type=int, default=NODE_MAX_ATTEMPTS,
                            help="Number of attempts to connect to node before giving up")

    group_keys = parser.add_argument_group("Keys")
    group_keys.add_argument('--strength', type=int, default=DEFAULT_KEY_STRENGTH,
                            choices=SUPPORTED_KEY_STRENGTHS,
                            help="Number of bits of entropy for a new mnemonic. Default is %d" %
                                 DEFAULT_KEY_STRENGTH)
    group_keys.add_argument('--mnemonic', '-m', default=None, metavar='WORDS',
                            help="Use this mnemonic sentence instead of generating a new one")
    group_keys.add_argument('--passphrase', default='', help="Optional BIP39 passphrase")
    group_keys.add_argument('--key-order', default=DEFAULT_KEY_ORDER, choices=KEY_ORDERS,
                            help="Order of public keys in multisig script: 'derivation' order of cosigners or "
                                 "'lexicographic' sorted. Default is %s" % DEFAULT_KEY_ORDER)
    group_keys.add_argument('--sigs-required', type=int, default=DEFAULT_SIGNATURES_REQUIRED,
                            help="Number of signatures required")
    group_keys.add_argument('--cosigners', type=int, default=DEFAULT_COSIGNER_COUNT,
                            help="Number of cosigner keys")

    group_funds = parser.add_argument_group("Funding")
    group_funds.add_argument('--deposit-amount', type=Decimal, default=Decimal(DEFAULT_DEPOSIT_AMOUNT),
                             help="Amount sent to the multisig address. Default is %s" % DEFAULT_DEPOSIT_AMOUNT)
    group_funds.add_argument('--history-count', type=int, default=DEFAULT_HISTORY_COUNT,
                             help="Number of history transactions. Default is %d" % DEFAULT_HISTORY_COUNT)
    group_funds.add_argument('--history-amount', type=Decimal, default=Decimal(DEFAULT_HISTORY_AMOUNT),
                             help="Amount of every history transaction. Default is %s" % DEFAULT_HISTORY_AMOUNT)

    parser.add_argument('--output', '-o', metavar='FILE',
                        help="Write multisig configuration as JSON to this file")
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Quiet mode, no output writen to console')
    return parser.parse_args(args)


def main(args=None):
    args = parse_args(args)
    sys.excepthook = exception_handler
    if not args.quiet:
        add_console_logging()
        print("Multisig Bootstrap - RegtestMultisig %s\n" % RTM_VERSION)

    config = BootstrapConfig(wallet_name=args.wallet_name, network=args.network,
                             sigs_required=args.sigs_required, cosigner_count=args.cosigners,
                             key_order=args.key_order, strength=args.strength, mnemonic=args.mnemonic,
                             passphrase=args.passphrase, deposit_amount=args.deposit_amount,
                             history_count=args.history_count, history_amount=args.history_amount,
                             node_max_attempts=args.max_attempts)
    client = BitcoindClient.from_settings(network=args.network, host=args.host, port=args.port,
                                          rpcuser=args.rpcuser, rpcpassword=args.rpcpassword,
                                          transport=args.transport, cli_path=args.cli_path, timeout=args.timeout)
    result = MultisigBootstrap(client, config).run()

    if args.output:
        with open(args.output, 'w') as f:
            f.write(result.as_json())
    if not args.quiet:
        print()
        result.info()
        if args.output:
            print("\nConfiguration written to %s" % args.output)
    return result


def run():
    try:
        main()
    except Exception as e:
        exception_handler(type(e), e, e.__traceback__)
        sys.exit(1)


if __name__ == '__main__':
    run()
