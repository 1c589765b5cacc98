import sys
import logging
import argparse
from offer_loader import OfferContext
from render.renderers import CatalogRenderer, RENDERER_REGISTRY


CATALOG_TABLES = ('occupations', 'metros', 'regions', 'benefits', 'limits')


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Total compensation calculator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  Summary           Print the total compensation breakdown (default)
  Benefits          Print each benefit counted in the total
  MarketComparison  Print the market salary comparison and cost-of-living adjustment
  Composition       Print the share of cash, equity and benefits in the total

Examples:
  python src/Program.py example
  python src/Program.py example --mode MarketComparison
  python src/Program.py --list occupations
  python src/Program.py --list metros
        """
    )
    parser.add_argument('offer_name', nargs='?', help='Name of the offer (folder in input-parameters)')
    parser.add_argument('--mode', '-m',
                        choices=list(RENDERER_REGISTRY.keys()),
                        default='Summary',
                        help='Output mode: Summary (default), Benefits, MarketComparison or Composition')
    parser.add_argument('--list', '-l',
                        choices=CATALOG_TABLES,
                        help='Print a reference table instead of calculating an offer')
    parser.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Log reference data loading to stderr')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    context = OfferContext()

    if args.list:
        CatalogRenderer(context.salary_catalog, context.benefit_catalog, context.contribution_limits).render(args.list)
        return

    # Require offer_name if not listing
    if not args.offer_name:
        parser.error("offer_name is required (or use --list to print a reference table)")

    try:
        breakdown = context.calculate_offer(args.offer_name)
    except FileNotFoundError as e:
        print(e)
        sys.exit(1)
    except ValueError as e:
        print(f"Invalid offer '{args.offer_name}': {e}")
        sys.exit(1)

    renderer = RENDERER_REGISTRY[args.mode]()
    renderer.render(breakdown)


if __name__ == "__main__":
    main()
