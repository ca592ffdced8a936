# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Package init
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

import regtestmultisig.encoding
import regtestmultisig.mnemonic
import regtestmultisig.keys
import regtestmultisig.scripts
import regtestmultisig.bootstrap

__all__ = ["encoding", "mnemonic", "keys", "scripts", "bootstrap", "services", "tools"]
