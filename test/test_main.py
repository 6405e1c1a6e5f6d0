import contextlib
import io
import os
import pathlib
import sys
import tempfile

import promptline.cliargs
import promptline.dialect
import promptline.exception
import promptline.main
import promptline.version
from promptline.env import Environment

import test_base

timeit = test_base.timeit
TEST = test_base.TestBase()

RIGHT = '\ue0b0'


# Runs promptline, returning (exit status, stdout, stderr).
def run_main(*argv):
    out = io.StringIO()
    err = io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        status = promptline.main.main(list(argv))
    return status, out.getvalue(), err.getvalue()


def compile_prompt(*argv):
    return promptline.main.Main(Environment.create(list(argv))).compile()


# Returns (values, ignored flags).
def parse_command_line(*argv):
    command_line = promptline.cliargs.CommandLine(
        'usage',
        separator=promptline.cliargs.flag('-s', '--separator', default=' ', aliases=('--seperator',)),
        preview=promptline.cliargs.boolean_flag('-p', '--preview'),
        descriptors=promptline.cliargs.anon())
    values = command_line.parse(list(argv))
    return values, command_line.ignored


@contextlib.contextmanager
def environment_variable(name, value):
    original = os.environ.get(name)
    os.environ[name] = value
    try:
        yield
    finally:
        if original is None:
            del os.environ[name]
        else:
            os.environ[name] = original


@timeit
def test_command_line():
    TEST.run(lambda: Environment.create(['a>', 'b']).descriptors,
             expected=['a>', 'b'])
    TEST.run(lambda: Environment.create(['a']).separator,
             expected=' ')
    TEST.run(lambda: Environment.create(['-s', '', 'a']).separator,
             expected='')
    TEST.run(lambda: Environment.create(['--separator', '-', 'a']).separator,
             expected='-')
    TEST.run(lambda: Environment.create(['--seperator', '|', 'a']).separator,
             expected='|')
    # Unrecognized flags are ignored
    TEST.run(lambda: Environment.create(['--bogus', 'a', '-x']).descriptors,
             expected=['a'])
    TEST.run(lambda: Environment.create(['-s', '', '--', '-x>', '--']).descriptors,
             expected=['-x>', '--'])
    TEST.run(lambda: parse_command_line('-q', 'a', '--zz', '-p'),
             expected=({'separator': ' ', 'preview': True, 'descriptors': ['a']}, ['-q', '--zz']))
    TEST.run(lambda: parse_command_line('--seperator', '-p', '-', 'b'),
             expected=({'separator': '-p', 'preview': False, 'descriptors': ['-', 'b']}, []))
    TEST.run(lambda: type(Environment.create(['a']).dialect),
             expected=promptline.dialect.ZshDialect)
    TEST.run(lambda: type(Environment.create(['-d', 'ansi', 'a']).dialect),
             expected=promptline.dialect.AnsiDialect)
    TEST.run(lambda: type(Environment.create(['--preview', 'a']).dialect),
             expected=promptline.dialect.AnsiDialect)
    TEST.run(lambda: Environment.create(['--dialect', 'fish', 'a']),
             expected_error=promptline.exception.KillShellException,
             error_message='Unknown dialect: fish')
    TEST.run(lambda: Environment.create(['a', '--separator']),
             expected_error=promptline.exception.KillShellException,
             error_message='Value missing for flag: --separator')


@timeit
def test_environment_variables():
    with environment_variable('PROMPTLINE_SEPARATOR', '_'):
        TEST.run(lambda: Environment.create(['a']).separator,
                 expected='_')
        TEST.run(lambda: Environment.create(['-s', '.', 'a']).separator,
                 expected='.')
    with environment_variable('PROMPTLINE_DIALECT', 'ansi'):
        TEST.run(lambda: Environment.create(['a']).preview,
                 expected=True)


@timeit
def test_compile():
    TEST.run(lambda: compile_prompt('(white;blue)%n>', '(;default)>'),
             expected=["PROMPT='';",
                       "PROMPT+=$'%K{blue}%F{white} %n %F{blue}';",
                       f"PROMPT+=$'%K{{default}}{RIGHT}  %F{{default}}';",
                       'precmd() {',
                       'export psvar=();',
                       '}'])
    TEST.run(lambda: compile_prompt('-s', '', '(;blue)$(git branch --show-current)>'),
             expected=["PROMPT='';",
                       "PROMPT+=$'%K{blue}%1v%F{blue}';",
                       'precmd() {',
                       'local a0=$(git branch --show-current);',
                       'export psvar=($a0);',
                       '}'])
    TEST.run(lambda: compile_prompt(),
             expected=["PROMPT='';",
                       'precmd() {',
                       'export psvar=();',
                       '}'])
    TEST.run(lambda: compile_prompt('-p', '(red;blue)x>'),
             expected=['\033[44m\033[31m x \033[34m\033[0m'])


@timeit
def test_main():
    TEST.run(lambda: run_main('x'),
             expected=(0, "PROMPT='';\nPROMPT+=$' x ';\nprecmd() {\nexport psvar=();\n}\n", ''))
    TEST.run(lambda: run_main('--version'),
             expected=(0, f'{promptline.version.VERSION}\n', ''))
    TEST.run(lambda: run_main('--help')[1].startswith('Usage: promptline'),
             expected=True)


@timeit
def test_errors_produce_no_output():
    status, out, err = run_main('good>', '(unterminated')
    TEST.check_ok('(unterminated: status', 1, status)
    TEST.check_ok('(unterminated: stdout', '', out)
    TEST.check_substring('(unterminated: stderr', 'Color group is missing its closing )', err)
    status, out, err = run_main('a', '')
    TEST.check_ok('empty descriptor: status', 1, status)
    TEST.check_ok('empty descriptor: stdout', '', out)
    TEST.check_substring('empty descriptor: stderr', 'Empty descriptor', err)
    status, out, err = run_main('?x;y')
    TEST.check_ok('malformed condition: status', 1, status)
    TEST.check_substring('malformed condition: stderr', 'numeric index', err)
    status, out, err = run_main('-d', 'fish', 'x')
    TEST.check_ok('bad dialect: status', 1, status)
    TEST.check_ok('bad dialect: stdout', '', out)


@timeit
def test_trace():
    with tempfile.TemporaryDirectory() as directory:
        trace_path = pathlib.Path(directory) / 'trace.txt'
        status, out, err = run_main('--trace', str(trace_path), '(red;blue)$(date)>')
        TEST.check_ok('trace: status', 0, status)
        TEST.check_substring('trace: stdout', "PROMPT+=$'%K{blue}%F{red} %1v %F{blue}';", out)
        trace = trace_path.read_text()
        for phase in ('TOKENIZE', 'PARSE', 'CAPTURE $(date) -> 1', 'RENDER'):
            TEST.check_substring('trace contents', phase, trace)


@timeit
def test_package_metadata():
    setup = (pathlib.Path(__file__).parent.parent / 'setup.py').read_text()
    TEST.check_substring('setup: name', "name='promptline'", setup)
    TEST.check_substring('setup: author', "author='Promptline developers'", setup)
    TEST.run(lambda: 'url=' in setup or 'author_email=' in setup,
             expected=False)


def main_stable():
    TEST.run_tests(test_command_line,
                   test_environment_variables,
                   test_compile,
                   test_main,
                   test_errors_produce_no_output,
                   test_trace,
                   test_package_metadata)


def main():
    TEST.reset_environment()
    main_stable()
    TEST.report_failures('test_main')
    sys.exit(TEST.failures)


if __name__ == '__main__':
    main()
