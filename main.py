import sys

from rich.pretty import pprint

from cardinals import *

__prog__ = "greet"

arguments = Arguments("greet", validate_num=True)
arguments.add_arg("name", "who to greet", True).with_handler(str.title)
arguments.add_arg_by_rule("greeting", "how to greet;false;hello")
arguments.add_arg("tags", "extra labels", False, True)


if __name__ == '__main__':
    try:
        arguments.parse_args(sys.argv[1:])
    except ParseError as fault:
        trigger(fault, shell=True)
    pprint(arguments)
    print(arguments.arg("greeting").string(), arguments.arg("name").string(), *arguments.arg("tags").array())
