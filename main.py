from rich.pretty import pprint

from compass import *

items = [
    Positional("FILE", help="file to read"),
    Decor("output switches"),
    Named("-v", "--verbose", help="talk more").item(),
    Named("--color", help="paint the output").item(),
    Named("-o", "--output", env="OUTPUT", help="where to write\nthe result").item("OUT"),
    Command("build", "b", help="compile the project"),
]


if __name__ == '__main__':
    pprint(items)
    print(synopsis(*(item.required(not item.is_flag()) for item in items)))
    Listing(items).show()
