"""
Simple licensematch example that loads a template event file and a license
text and prints a report.
"""
from pathlib import Path
import licensematch
from licensematch.io.json_io import load_template_events, load_text
from licensematch.core import compare_template
from licensematch.reporting import format_text_report


def main() -> None:
    pkg_dir = Path(licensematch.__file__).resolve().parent
    templates_dir = pkg_dir / "examples" / "templates"
    events = load_template_events(templates_dir / "mit_events.json")
    text = load_text(templates_dir / "mit.txt")

    comparison = compare_template(events, text)
    print(format_text_report(comparison.get_differences(), text, title="licensematch Simple Example"))

    # A text with a changed word diverges at that word
    altered = text.replace("merge", "merges")
    comparison = compare_template(events, altered)
    print(format_text_report(comparison.get_differences(), altered, title="licensematch Altered Text"))


if __name__ == "__main__":
    main()
