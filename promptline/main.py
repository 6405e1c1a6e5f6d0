# This file is part of Promptline.
#
# Promptline is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, (or at your
# option) any later version.
#
# Promptline is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# for more details.
#
# You should have received a copy of the GNU General Public License
# along with Promptline.  If not, see <https://www.gnu.org/licenses/>.

import sys

import prompt_toolkit

import promptline.env
import promptline.exception
import promptline.parser
import promptline.render
import promptline.util


class Main(object):

    def __init__(self, env):
        self.env = env

    def parse(self):
        return [promptline.parser.parse_descriptor(descriptor, self.env.trace)
                for descriptor in self.env.descriptors]

    # Returns the output lines. Every descriptor is parsed and rendered before anything is
    # returned, so a bad descriptor produces no output at all.
    def compile(self):
        parsed = self.parse()
        renderer = promptline.render.Renderer(self.env.dialect, self.env.separator, self.env.trace)
        fragments = [renderer.render_descriptor(segments) for segments in parsed]
        return renderer.script(fragments)

    def run(self):
        lines = self.compile()
        if self.env.preview:
            for line in lines:
                prompt_toolkit.print_formatted_text(prompt_toolkit.ANSI(line))
        else:
            for line in lines:
                print(line)
        sys.stdout.flush()


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        env = promptline.env.Environment.create(argv)
        try:
            Main(env).run()
        finally:
            env.trace.disable()
    except promptline.exception.ExitException:
        pass
    except (promptline.exception.KillShellException,
            promptline.exception.KillCommandException) as e:
        promptline.util.print_to_stderr(e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
