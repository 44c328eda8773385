# src/color_literal_highlighter/demo.py
import argparse
import json
import logging
import sys


def _build_options(args):
    options = {"css": args.css, "css_fn": args.css_fn, "names": not args.no_names}
    if args.tailwind:
        options["tailwind"] = args.tailwind
    if args.sass:
        options["sass"] = {"enable": True}
    return options


def _named_colors(args):
    from .highlighting.color.vocab import get_named_colors, get_xkcd_colors

    if not args.xkcd:
        return None
    named = get_named_colors()
    named.update(get_xkcd_colors())
    return named


def _describe(source, line_no, line, match):
    from .highlighting.color.utils import color_is_bright

    r, g, b = match.rgb
    return {
        "source": source,
        "line": line_no,
        "start": match.start,
        "end": match.end,
        "text": line[match.start:match.end],
        "color": f"#{match.rgb_hex}",
        "foreground": "#000000" if color_is_bright(r, g, b) else "#ffffff",
    }


def main(argv=None):
    """CLI demo: find color literals in files (or inline text) and print them as JSON."""
    from .highlighting.orchestrator import ColorizerSession

    parser = argparse.ArgumentParser(
        prog="colorizer-demo",
        description="Find color literals (hex, rgb()/hsl(), names, Tailwind, Sass variables) in text.",
    )
    parser.add_argument("paths", nargs="*", help="Files to scan (Sass imports resolve relative to them)")
    parser.add_argument("--text", help="Inline text to scan instead of files (e.g. 'a { color: #f00 }')")
    parser.add_argument("--css", action="store_true", help="Enable every CSS format")
    parser.add_argument("--css-fn", action="store_true", dest="css_fn", help="Enable rgb()/hsl() functions")
    parser.add_argument("--no-names", action="store_true", dest="no_names", help="Disable named colors")
    parser.add_argument("--xkcd", action="store_true", help="Add the XKCD color names (needs matplotlib)")
    parser.add_argument("--tailwind", choices=["none", "normal", "lsp", "both"], help="Tailwind mode")
    parser.add_argument("--sass", action="store_true", help="Resolve Sass $variables and imports")
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")

    args = parser.parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.text is None and not args.paths:
        parser.error("give at least one path or --text")

    try:
        results = []
        with ColorizerSession(_build_options(args), named_colors=_named_colors(args)) as session:
            sources = [("<text>", args.text.splitlines())] if args.text is not None else []
            for path in args.paths:
                with open(path, "r", encoding="utf-8") as f:
                    sources.append((path, f.read().splitlines()))

            for source, lines in sources:
                session.attach_buffer(source, path=None if source == "<text>" else source)
                session.update_variables(source, lines)
                found = session.highlight(source, lines)
                for line_no in sorted(found):
                    for match in found[line_no]:
                        results.append(_describe(source, line_no, lines[line_no], match))

        print(json.dumps(results, indent=2, ensure_ascii=False))
    except (OSError, ValueError, TypeError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
