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
Operation records and the table the calculator looks them up in.

Operation names are case-insensitive; they are stored lower case.  Each
operation remembers where it came from so a definition from a higher
priority source is never replaced by one from a lower priority source,
whatever order the sources are loaded in.  The table keeps one definition
per source for each name, so dropping a source (on reload) uncovers the
definition it was hiding.
'''

BUILTIN = "builtin"
LUA     = "lua"
PYTHON  = "python"

# Larger wins when two sources define the same name.
priority = {
    BUILTIN : 0,
    LUA     : 1,
    PYTHON  : 2,
}

class Operation(object):
    '''A named function that consumes arity values from the stack.
    '''
    def __init__(self, name, arity, function, source=BUILTIN, doc=None):
        self.name = name.lower()
        self.arity = arity
        self.function = function
        self.source = source
        if doc is None:
            doc = getattr(function, "__doc__", None)
        self.doc = doc

    def __call__(self, *args):
        return self.function(*args)

    def __repr__(self):
        return "Operation(%r, %d, source=%r)" % (self.name, self.arity, self.source)

class OperationTable(object):
    def __init__(self):
        # name -> {source: Operation}
        self.operations = {}

    def register(self, op):
        '''Add op to the table.  Returns False if an operation of the same
        name from a higher priority source hides it.
        '''
        self.operations.setdefault(op.name, {})[op.source] = op
        return self.lookup(op.name) is op

    def add(self, name, arity, function, source=BUILTIN, doc=None):
        return self.register(Operation(name, arity, function, source, doc))

    def lookup(self, name):
        definitions = self.operations.get(name.lower())
        if not definitions:
            return None
        return definitions[max(definitions, key=priority.get)]

    def remove_source(self, source):
        'Forget every operation that came from source.'
        for name in list(self.operations):
            self.operations[name].pop(source, None)
            if not self.operations[name]:
                del self.operations[name]

    def names(self):
        return sorted(self.operations)

    def __contains__(self, name):
        return name.lower() in self.operations

    def __len__(self):
        return len(self.operations)

