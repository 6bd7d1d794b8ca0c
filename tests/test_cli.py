'''
Command line interface tests
'''

from io import StringIO

from fxcalc import cli
from fxcalc.cli import CLI
from fxcalc.lexer import Lexer

from pytest import fixture, raises


@fixture
def stdin(monkeypatch):
    stream = StringIO()
    monkeypatch.setattr(cli, 'stdin', stream)
    return stream


@fixture
def stderr(monkeypatch):
    stream = StringIO()
    monkeypatch.setattr(cli, 'stderr', stream)
    return stream


def run(*args):
    CLI().run(args=list(args))


def lines(capsys):
    return capsys.readouterr().out.splitlines()


def test_program(capsys, stdin, stderr):
    run('-e', '1+2 -> A')
    assert lines(capsys) == ['1+2\N{RIGHTWARDS ARROW}A', '3']
    assert stderr.getvalue() == ''


def test_several_programs(capsys, stdin, stderr):
    run('-e', '1', '2')
    assert lines(capsys) == ['1', '1', '2', '2']


def test_disp(capsys, stdin, stderr):
    run('-e', '1 disp 2')
    assert lines(capsys) == ['1', '1 -Disp-', '2', '2']


def test_passes(capsys, stdin, stderr):
    run('-n', '3', '-e', 'Ans+1')
    assert lines(capsys) == ['Ans+1', '1', 'Ans+1', '2', 'Ans+1', '3']


def test_display_settings(capsys, stdin, stderr):
    run('--fix', '3', '-e', '1 div 3')
    assert lines(capsys)[-1] == '0.333'
    run('--sci', '2', '-e', '1234')
    assert lines(capsys)[-1] == '1.2E3'


def test_angle(capsys, stdin, stderr):
    run('--angle', 'Rad', '-e', 'sin(pi/2)')
    assert lines(capsys)[-1] == '1'
    run('--angle', 'Gra', '-e', 'cos(200)')
    assert lines(capsys)[-1] == '-1'


def test_runtime_error(capsys, stdin, stderr):
    run('-e', '1 div 0', '1+1')
    assert lines(capsys) == ['1+1', '2']
    assert stderr.getvalue() == 'Math ERROR at 1:8 (Division by 0)\n'


def test_verbose_error(capsys, stdin, stderr):
    run('-v', '-e', 'Goto 1')
    assert stderr.getvalue().splitlines() == [
        'Goto ERROR at 1:6 (Label not found)',
        'at token 1',
    ]
    assert 'CalcGotoError' in capsys.readouterr().err


def test_unknown_symbol(capsys, stdin, stderr):
    run('-e', '1@')
    assert lines(capsys) == ['1', '1']
    assert stderr.getvalue() == "1:2 Unknown symbol '@' (skipped)\n"


def test_prompt(capsys, stdin, stderr):
    stdin.write('4\n')
    stdin.seek(0)
    run('-e', '? -> A: A^2')
    assert lines(capsys) == ['A\N{SUPERSCRIPT TWO}', '16']


def test_prompt_end_of_input(capsys, stdin, stderr):
    run('-e', '? -> A: A^2')
    assert lines(capsys) == []


def test_prompt_retries(capsys, stdin, stderr):
    stdin.write('E\n2+3\n')
    stdin.seek(0)
    run('-e', '? -> B')
    assert lines(capsys) == ['?\N{RIGHTWARDS ARROW}B', '5']
    assert stderr.getvalue() == \
        'Syntax ERROR at 1:2 (Missing number after exp)\n'


def test_prompt_keeps_value(capsys, stdin, stderr):
    stdin.write('\n')
    stdin.seek(0)
    run('-e', '7 -> C: ? -> C')
    assert lines(capsys) == ['?\N{RIGHTWARDS ARROW}C', '7']


def test_calculator(capsys, stdin, stderr):
    stdin.write('1+2\n\n2*Ans\n1 div 0\nAns:1\nsqrt(Ans+3\n')
    stdin.seek(0)
    run()
    assert lines(capsys) == ['3', '6', '3']
    assert stderr.getvalue().splitlines() == [
        'Math ERROR at 1:8 (Division by 0)',
        "1:4 Unknown symbol ':' (skipped)",
        'Syntax ERROR at 1:5 (Unexpected number)',
    ]


def test_file(capsys, stdin, stderr, tmp_path):
    program = tmp_path / 'program.txt'
    program.write_text('2: Ans*3\n')
    run('-f', str(program))
    assert lines(capsys) == ['Ans*3', '6']


def test_dump(capsys, stdin, stderr):
    run('-D', '-e', '2pi')
    assert lines(capsys) == [
        '<kind>\t<repr(source)>\t<shown>',
        "digit\t'2'\t2",
        "valued\t'pi'\t\N{GREEK SMALL LETTER PI}",
    ]


def test_raw_grammar(capsys, stdin, stderr):
    run('-G')
    assert lines(capsys) == [Lexer().pattern]


def test_bad_arguments(capsys, stdin, stderr):
    with raises(SystemExit):
        run('--fix', '12')
    with raises(SystemExit):
        run('--fix', '1', '--sci', '2')
    with raises(SystemExit):
        run('--angle', 'Turn')
    with raises(SystemExit):
        run('-G', '-D')
