'''
Copyright (c) 2009, Don Peterson
Copyright (c) 2011, Vernon Mauery
All rights reserved.

Redistribution and use in source and binary forms, with or
without modification, are permitted provided that the following
conditions are met:

* Redistributions of source code must retain the above copyright
notice, this list of conditions and the following disclaimer.
* Redistributions in binary form must reproduce the above
copyright notice, this list of conditions and the following
disclaimer in the documentation and/or other materials provided
with the distribution.
* The names of the contributors may not be used to endorse or
promote products derived from this software without specific
prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
"AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR
A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY
THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
(INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
'''

'''
Splits a line of calculator input into tokens.

A line is a sequence of whitespace separated tokens; '#' starts a
comment that runs to the end of the line.  Each token is tagged as a
number or a word (an operation name); words are looked up later, so
the grammar doesn't need to know which operations exist.
'''

import re

from pyparsing import Group, ParseException, Regex, ZeroOrMore

from .stack import CalcException

class ParseError(CalcException):
    pass

NUMBER = "number"
WORD = "word"

# A token ends at whitespace, a comment or the end of the line.
_end = r"(?=[\s#]|$)"

number = Regex(r"""
    [+-]?
    (
        0[xXoObB][0-9a-fA-F]+               # 0x1f 0o17 0b101
      | (\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)? # 12  1.5  .5  6.02e23
        [yzafpnumkMGTPEZY]?                 # SI suffix
      | inf | nan
    )
    """ + _end, flags=re.X)
word = Regex(r"[^\s#]+")
comment = Regex(r"#.*")

token = Group(number(NUMBER) | word(WORD))
line_grammar = ZeroOrMore(token)
line_grammar.ignore(comment)

def tokenize(line):
    '''Return a list of (kind, text) pairs for the tokens in line.
    kind is NUMBER or WORD.
    '''
    try:
        results = line_grammar.parse_string(line, parse_all=True)
    except ParseException as e:
        raise ParseError("Invalid input at column %d: %s" % (e.column, line))
    tokens = []
    for group in results:
        if NUMBER in group:
            tokens.append((NUMBER, group[NUMBER]))
        else:
            tokens.append((WORD, group[WORD]))
    return tokens
