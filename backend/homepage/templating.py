"""
Minimal template language for homepage section fragments.

Supported directives::

    {{key}}                       value from the data record ('' if missing)
    {{#if key}}...{{/if}}         body kept when the value is defined, not
                                  None, not False and not ''
    {{#each key}}...{{/each}}     body repeated per item of a list
    {{this}} {{@index}}           current item / zero based position
    {{#if @first}} {{#if @last}}  first / last iteration only

Inside a loop, ``{{key}}`` looks at the current item first and then at the
enclosing records. Templates are parsed once into a small tree (text,
variable, each, if) and evaluated against a scope chain, so blocks nest to
any depth. Rendering never leaves directive syntax behind: unknown block
tags are dropped, an unclosed block renders its body inline and truncated
``{{`` fragments are cut to the end of their line. Values are inserted
verbatim (templates are trusted admin content).
"""
import re

TAG = re.compile(r'\{\{([^{}]*)\}\}')
EACH_OPEN = re.compile(r'^#each\s+(\S+)$')
IF_OPEN = re.compile(r'^#if\s+(.+)$')
RESIDUAL_TAG = re.compile(r'\{\{[#/@][^}]*\}\}')
TRUNCATED_TAG = re.compile(r'\{\{[^}\n]*$', re.MULTILINE)

EACH = 'each'
IF = 'if'


class Text:
    def __init__(self, value):
        self.value = value

    def render(self, scope, out):
        out.append(self.value)


class Variable:
    def __init__(self, key):
        self.key = key

    def render(self, scope, out):
        out.append(stringify(scope.resolve(self.key)))


class If:
    def __init__(self, condition, children):
        self.condition = condition
        self.children = children

    def render(self, scope, out):
        if scope.test(self.condition):
            render_nodes(self.children, scope, out)


class Each:
    def __init__(self, key, children):
        self.key = key
        self.children = children

    def render(self, scope, out):
        items = scope.lookup(self.key)
        if not isinstance(items, (list, tuple)):
            return
        for index, item in enumerate(items):
            render_nodes(self.children, LoopScope(scope, item, index, len(items)), out)


def render_nodes(nodes, scope, out):
    for node in nodes:
        node.render(scope, out)


def is_truthy(value):
    return value is not None and value is not False and value != ''


def stringify(value):
    """Text form of a value, following the storefront's JavaScript heritage"""
    if value is None:
        return ''
    if value is True:
        return 'true'
    if value is False:
        return 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ','.join(stringify(v) for v in value)
    return str(value)


class Scope:
    """Root scope: the section's data record"""

    parent = None

    def __init__(self, data):
        self.data = data if isinstance(data, dict) else {}

    def own(self, key):
        return self.data.get(key)

    def lookup(self, key):
        scope = self
        while scope is not None:
            value = scope.own(key)
            if value is not None:
                return value
            scope = scope.parent
        return None

    def loop(self):
        """Innermost enclosing loop scope"""
        scope = self
        while scope is not None and not isinstance(scope, LoopScope):
            scope = scope.parent
        return scope

    def resolve(self, key):
        """Value for a {{key}} placeholder"""
        if key == 'this':
            loop = self.loop()
            if loop is None or isinstance(loop.item, (dict, list, tuple)):
                return None
            return loop.item
        if key.startswith('@'):
            loop = self.loop()
            if key == '@index' and loop is not None:
                return loop.index
            return None
        return self.lookup(key)

    def test(self, condition):
        loop = self.loop()
        if condition == '@first':
            return loop is not None and loop.index == 0
        if condition == '@last':
            return loop is not None and loop.index == loop.length - 1
        if condition == 'this':
            return loop is not None and is_truthy(loop.item)
        return is_truthy(self.lookup(condition))


class LoopScope(Scope):
    def __init__(self, parent, item, index, length):
        self.parent = parent
        self.item = item
        self.index = index
        self.length = length

    def own(self, key):
        if isinstance(self.item, dict):
            return self.item.get(key)
        return None


def tokenize(source):
    """Split source into ('text'|'var'|'open'|'close', value) tokens"""
    tokens = []
    position = 0
    for match in TAG.finditer(source):
        if match.start() > position:
            tokens.append(('text', source[position:match.start()]))
        position = match.end()

        tag = match.group(1).strip()
        each_open = EACH_OPEN.match(tag)
        if_open = IF_OPEN.match(tag)
        if each_open:
            tokens.append(('open', (EACH, each_open.group(1))))
        elif if_open:
            tokens.append(('open', (IF, if_open.group(1).strip())))
        elif tag in ('/each', '/if'):
            tokens.append(('close', tag[1:]))
        elif tag.startswith('#') or tag.startswith('/') or not tag:
            continue
        else:
            tokens.append(('var', tag))
    if position < len(source):
        tokens.append(('text', source[position:]))
    return tokens


def parse(source):
    """Parse template source into a list of nodes"""
    nodes, _, _ = _parse_block(tokenize(source), 0, [])
    return nodes


def _parse_block(tokens, position, open_blocks):
    nodes = []
    while position < len(tokens):
        kind, value = tokens[position]
        position += 1

        if kind == 'text':
            nodes.append(Text(value))
        elif kind == 'var':
            nodes.append(Variable(value))
        elif kind == 'open':
            block, argument = value
            children, position, closed = _parse_block(tokens, position, open_blocks + [block])
            if closed:
                nodes.append(Each(argument, children) if block == EACH else If(argument, children))
            else:
                nodes.extend(children)
        elif kind == 'close':
            if open_blocks and value == open_blocks[-1]:
                return nodes, position, True
            if value in open_blocks:
                # Closes an outer block: this one was never closed
                return nodes, position - 1, False
            # Stray closing tag, dropped
    return nodes, position, False


def cleanup(html):
    """Strip leftover directive syntax and blank whitespace-only lines"""
    html = RESIDUAL_TAG.sub('', html)
    html = TRUNCATED_TAG.sub('', html)
    return '\n'.join('' if not line.strip() else line for line in html.split('\n'))


class Template:
    """A parsed template, reusable across renders"""

    def __init__(self, source, name=None):
        self.name = name
        self.source = source
        self.nodes = parse(source)

    def render(self, data):
        out = []
        render_nodes(self.nodes, Scope(data), out)
        return cleanup(''.join(out))

    def __repr__(self):
        return f'<Template {self.name or "<string>"}>'


def render_template(source, data):
    """Parse and render in one step"""
    return Template(source).render(data)
