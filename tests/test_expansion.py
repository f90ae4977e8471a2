from collections import OrderedDict

import pytest

from uritmpl import expansion
from uritmpl import parser
from uritmpl.data import Assoc, Atom, List, VariableContext
from uritmpl.exceptions import ExpansionError
from uritmpl.nodes import Expression, Prefix, Template, VariableSpec


@pytest.fixture(scope='module')
def rfc_context():
    """ Variables used by the examples of RFC 6570 section 3 """
    return VariableContext({
        'count': List(['one', 'two', 'three']),
        'dom': List(['example', 'com']),
        'dub': Atom('me/too'),
        'hello': Atom('Hello World!'),
        'half': Atom('50%'),
        'var': Atom('value'),
        'who': Atom('fred'),
        'base': Atom('http://example.com/home/'),
        'path': Atom('/foo/bar'),
        'list': List(['red', 'green', 'blue']),
        'keys': Assoc([('semi', ';'), ('dot', '.'), ('comma', ',')]),
        'v': Atom('6'),
        'x': Atom('1024'),
        'y': Atom('768'),
        'empty': Atom(''),
        'empty_keys': Assoc([]),
        'empty_list': List([]),
    })


@pytest.mark.parametrize('text, expected', (
    # Simple string expansion
    ('{var}', 'value'),
    ('{hello}', 'Hello%20World%21'),
    ('{half}', '50%25'),
    ('O{empty}X', 'OX'),
    ('O{undef}X', 'OX'),
    ('{x,y}', '1024,768'),
    ('{x,hello,y}', '1024,Hello%20World%21,768'),
    ('?{x,empty}', '?1024,'),
    ('?{x,undef}', '?1024'),
    ('?{undef,y}', '?768'),
    ('{var:3}', 'val'),
    ('{var:30}', 'value'),
    ('{var:9999}', 'value'),
    ('{list}', 'red,green,blue'),
    ('{list*}', 'red,green,blue'),
    ('{keys}', 'semi,%3B,dot,.,comma,%2C'),
    ('{keys*}', 'semi=%3B,dot=.,comma=%2C'),
    # Reserved expansion
    ('{+var}', 'value'),
    ('{+hello}', 'Hello%20World!'),
    ('{+half}', '50%25'),
    ('{base}index', 'http%3A%2F%2Fexample.com%2Fhome%2Findex'),
    ('{+base}index', 'http://example.com/home/index'),
    ('O{+empty}X', 'OX'),
    ('O{+undef}X', 'OX'),
    ('{+path}/here', '/foo/bar/here'),
    ('here?ref={+path}', 'here?ref=/foo/bar'),
    ('up{+path}{var}/here', 'up/foo/barvalue/here'),
    ('{+x,hello,y}', '1024,Hello%20World!,768'),
    ('{+path,x}/here', '/foo/bar,1024/here'),
    ('{+path:6}/here', '/foo/b/here'),
    ('{+list}', 'red,green,blue'),
    ('{+list*}', 'red,green,blue'),
    ('{+keys}', 'semi,;,dot,.,comma,,'),
    ('{+keys*}', 'semi=;,dot=.,comma=,'),
    # Fragment expansion
    ('{#var}', '#value'),
    ('{#hello}', '#Hello%20World!'),
    ('{#half}', '#50%25'),
    ('foo{#empty}', 'foo#'),
    ('foo{#undef}', 'foo'),
    ('{#x,hello,y}', '#1024,Hello%20World!,768'),
    ('{#path,x}/here', '#/foo/bar,1024/here'),
    ('{#path:6}/here', '#/foo/b/here'),
    ('{#list}', '#red,green,blue'),
    ('{#list*}', '#red,green,blue'),
    ('{#keys}', '#semi,;,dot,.,comma,,'),
    ('{#keys*}', '#semi=;,dot=.,comma=,'),
    # Label expansion with dot-prefix
    ('{.who}', '.fred'),
    ('{.who,who}', '.fred.fred'),
    ('{.half,who}', '.50%25.fred'),
    ('www{.dom*}', 'www.example.com'),
    ('X{.var}', 'X.value'),
    ('X{.empty}', 'X.'),
    ('X{.undef}', 'X'),
    ('X{.var:3}', 'X.val'),
    ('X{.list}', 'X.red,green,blue'),
    ('X{.list*}', 'X.red.green.blue'),
    ('X{.keys}', 'X.semi,%3B,dot,.,comma,%2C'),
    ('X{.keys*}', 'X.semi=%3B.dot=..comma=%2C'),
    ('X{.empty_keys}', 'X'),
    ('X{.empty_keys*}', 'X'),
    # Path segment expansion
    ('{/who}', '/fred'),
    ('{/who,who}', '/fred/fred'),
    ('{/half,who}', '/50%25/fred'),
    ('{/who,dub}', '/fred/me%2Ftoo'),
    ('{/var}', '/value'),
    ('{/var,empty}', '/value/'),
    ('{/var,undef}', '/value'),
    ('{/var,x}/here', '/value/1024/here'),
    ('{/var:1,var}', '/v/value'),
    ('{/list}', '/red,green,blue'),
    ('{/list*}', '/red/green/blue'),
    ('{/list*,path:4}', '/red/green/blue/%2Ffoo'),
    ('{/keys}', '/semi,%3B,dot,.,comma,%2C'),
    ('{/keys*}', '/semi=%3B/dot=./comma=%2C'),
    # Path-style parameter expansion
    ('{;who}', ';who=fred'),
    ('{;half}', ';half=50%25'),
    ('{;empty}', ';empty'),
    ('{;v,empty,who}', ';v=6;empty;who=fred'),
    ('{;v,bar,who}', ';v=6;who=fred'),
    ('{;x,y}', ';x=1024;y=768'),
    ('{;x,y,empty}', ';x=1024;y=768;empty'),
    ('{;x,y,undef}', ';x=1024;y=768'),
    ('{;hello:5}', ';hello=Hello'),
    ('{;list}', ';list=red,green,blue'),
    ('{;list*}', ';list=red;list=green;list=blue'),
    ('{;keys}', ';keys=semi,%3B,dot,.,comma,%2C'),
    ('{;keys*}', ';semi=%3B;dot=.;comma=%2C'),
    # Form-style query expansion
    ('{?who}', '?who=fred'),
    ('{?half}', '?half=50%25'),
    ('{?x,y}', '?x=1024&y=768'),
    ('{?x,y,empty}', '?x=1024&y=768&empty='),
    ('{?x,y,undef}', '?x=1024&y=768'),
    ('{?var:3}', '?var=val'),
    ('{?list}', '?list=red,green,blue'),
    ('{?list*}', '?list=red&list=green&list=blue'),
    ('{?keys}', '?keys=semi,%3B,dot,.,comma,%2C'),
    ('{?keys*}', '?semi=%3B&dot=.&comma=%2C'),
    ('{?empty_list}', ''),
    ('{?empty_list*}', ''),
    # Form-style query continuation
    ('{&who}', '&who=fred'),
    ('{&half}', '&half=50%25'),
    ('?fixed=yes{&x}', '?fixed=yes&x=1024'),
    ('{&x,y,empty}', '&x=1024&y=768&empty='),
    ('{&var:3}', '&var=val'),
    ('{&list}', '&list=red,green,blue'),
    ('{&list*}', '&list=red&list=green&list=blue'),
    ('{&keys}', '&keys=semi,%3B,dot,.,comma,%2C'),
    ('{&keys*}', '&semi=%3B&dot=.&comma=%2C'),
))
def test_expand(rfc_context, text, expected):
    assert expansion.expand(parser.parse(text), rfc_context) == expected


def test_expand_undefined():
    assert expansion.expand(parser.parse('{id}'), VariableContext()) == ''
    assert expansion.expand(parser.parse('{?id}{/id}{#id}'), {}) == ''


def test_expand_raw_mapping():
    fields = OrderedDict([
        ('id', 'foo'),
        ('page', 2),
        ('tags', ['a', 'b']),
        ('filter', OrderedDict([('sort', 'asc'), ('limit', '10')])),
        ('missing', None),
    ])
    template = parser.parse('/items/{id}{?page,tags*,missing}{&filter*}')
    assert expansion.expand(template, fields) == '/items/foo?page=2&tags=a&tags=b&sort=asc&limit=10'


def test_expand_encoding():
    context = {'name': 'café ~.-_', 'pct': '%2F%zz'}
    assert expansion.expand(parser.parse('{name}'), context) == 'caf%C3%A9%20~.-_'
    # Existing triplets pass through reserved expansion without being decoded
    assert expansion.expand(parser.parse('{+pct}'), context) == '%2F%25zz'
    assert expansion.expand(parser.parse('{pct}'), context) == '%252F%25zz'


def test_expand_prefix_characters():
    # Truncation counts characters before encoding
    context = {'word': 'étés'}
    assert expansion.expand(parser.parse('{word:2}'), context) == '%C3%A9t'


def test_expand_deterministic(rfc_context):
    template = parser.parse('{?keys*,list,x}')
    assert expansion.expand(template, rfc_context) == expansion.expand(template, rfc_context)


@pytest.mark.parametrize('text', (
    '{list:3}',
    '{?list:3}',
    '{keys:1}',
    '{+keys:1}',
    '{=var}',
    '{,var}',
    '{!var}',
    '{@var}',
    '{|var}',
    '{var:10000}',
))
def test_expand_fail(rfc_context, text):
    with pytest.raises(ExpansionError):
        expansion.expand(parser.parse(text), rfc_context)


def test_expand_fail_undefined_prefix_list():
    # Misuse is only detectable once the value is known
    template = Template([Expression([VariableSpec('list', Prefix(3))])])
    assert expansion.expand(template, {}) == ''
    with pytest.raises(ExpansionError):
        expansion.expand(template, {'list': ['a']})


@pytest.mark.parametrize('text', ('{a}', '{+a}', '{?a*}', '{a:1}'))
def test_expand_fail_unencodable(text):
    # Lone surrogates have no UTF-8 form
    with pytest.raises(ExpansionError):
        expansion.expand(parser.parse(text), {'a': '\ud800'})
