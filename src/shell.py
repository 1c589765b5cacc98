#!/usr/bin/env python3
"""Interactive command shell for building and evaluating an offer.

This module provides an interactive shell that holds a single offer, lets
the user edit it field by field and recalculates the total compensation
after every change.

Usage:
    python src/shell.py [offer_name]

Commands:
    load <offer_name>             - Load an offer from input-parameters
    new                           - Start from a blank offer
    cash <amount>                 - Set the cash salary
    equity ...                    - Set the equity grant
    match ...                     - Set the retirement match
    benefit <id> on|off|<amount>  - Enable, disable or set a benefit
    custom ...                    - Add, remove or list custom benefits
    occupation <id>               - Select the occupation to compare against
    metro <id> / region <id>      - Select the location
    get <fields>                  - Query calculated fields
    render [mode]                 - Print a report
    exit/quit                     - Exit the shell

Examples:
    > cash 150,000
    > benefit health on
    > occupation software-engineer
    > metro seattle
    > get total_compensation, market_salary
"""

import sys
import os
import cmd
import readline
import logging
from dataclasses import replace

# Configure readline for tab completion
# This must be done before the cmd.Cmd class is used
try:
    # For Unix/Linux/macOS - use libedit or GNU readline
    if 'libedit' in readline.__doc__:
        # macOS uses libedit which has different syntax
        readline.parse_and_bind("bind ^I rl_complete")
    else:
        # GNU readline (Linux)
        readline.parse_and_bind("tab: complete")
except (AttributeError, TypeError):
    pass  # readline might not be fully available

# Add src directory to path for imports
sys.path.insert(0, os.path.dirname(__file__))

from model.CompensationResult import CompensationBreakdown
from model.OfferData import (
    BenefitSelection,
    MatchMode,
    OfferInputs,
    new_custom_benefit,
    switch_match_mode,
)
from model.ReferenceData import NATIONAL, REGION_IDS
from model.field_metadata import FIELD_CATEGORIES, FIELD_METADATA, get_description, get_short_name
from offer_loader import OfferContext, parse_amount, with_region_for_metro
from render.renderers import (
    RENDERER_REGISTRY,
    CatalogRenderer,
    FieldsRenderer,
    SummaryRenderer,
    format_currency,
    limit_warnings,
)

logger = logging.getLogger(__name__)


class CompensationShell(cmd.Cmd):
    """Interactive shell for editing an offer and viewing its breakdown."""

    intro = """
Compensation Calculator Interactive Shell
=========================================
Type 'help' for available commands.
Type 'fields' to see available data fields.
Type 'exit' or 'quit' to exit.
"""
    prompt = '> '

    def __init__(self, context: OfferContext = None, offer: OfferInputs = None, offer_name: str = None):
        super().__init__()
        self.context = context or OfferContext()
        self.offer = offer or self.context.empty_offer()
        self.offer_name = offer_name
        self.limits_year = None
        self.available_fields = list(FIELD_METADATA.keys())

    def preloop(self):
        """Set up readline before entering the command loop."""
        try:
            # Set completer delimiters - space and comma separate arguments
            readline.set_completer_delims(' \t\n,')
            if 'libedit' in (readline.__doc__ or ''):
                readline.parse_and_bind("bind ^I rl_complete")
            else:
                readline.parse_and_bind("tab: complete")
        except (AttributeError, TypeError):
            pass  # readline might not be fully available

    def _get_available_offers(self) -> list:
        """Get list of available offer names from input-parameters directory."""
        input_params_dir = os.path.join(self.context.base_path, 'input-parameters')
        offers = []
        if os.path.exists(input_params_dir):
            for item in sorted(os.listdir(input_params_dir)):
                if os.path.isdir(os.path.join(input_params_dir, item)):
                    offers.append(item)
        return offers

    def breakdown(self) -> CompensationBreakdown:
        """Recalculate the current offer from scratch."""
        return self.context.calculate(self.offer, self.limits_year)

    def _update(self, offer: OfferInputs):
        """Replace the offer and print the new total and any warnings."""
        self.offer = offer
        result = self.breakdown()
        print(f"Total compensation: {format_currency(result.total_compensation)}")
        for warning in limit_warnings(result):
            print(f"Warning: {warning}")

    # Offer editing

    def do_new(self, arg: str):
        """Start from a blank offer.

        Usage: new
        """
        self.offer = self.context.empty_offer()
        self.offer_name = None
        print("Started a new offer.")

    def do_cash(self, arg: str):
        """Set the annual cash salary.

        Usage: cash <amount>

        Commas and a leading $ are accepted. Anything that is not a
        non-negative number is treated as 0.
        """
        self._update(replace(self.offer, cash_salary=parse_amount(arg)))

    def do_equity(self, arg: str):
        """Set the equity grant.

        Usage: equity on|off
               equity <shares> <strike_price> <fair_market_value>

        Setting the three values also turns the grant on.
        """
        parts = arg.split()
        equity = self.offer.equity
        if len(parts) == 1 and parts[0] in ('on', 'off'):
            equity = replace(equity, enabled=parts[0] == 'on')
        elif len(parts) == 3:
            equity = replace(
                equity,
                enabled=True,
                shares=parse_amount(parts[0]),
                strike_price=parse_amount(parts[1]),
                fair_market_value=parse_amount(parts[2]),
            )
        else:
            print("Usage: equity on|off  or  equity <shares> <strike_price> <fair_market_value>")
            return
        self._update(replace(self.offer, equity=equity))

    def do_match(self, arg: str):
        """Set the employer retirement match.

        Usage: match off
               match percentage <percent>     (5 means 5% of cash salary)
               match fixed-amount <amount>    (annual match)

        Switching between modes clears the previous value.
        """
        parts = arg.split()
        match = self.offer.retirement_match
        if parts == ['off']:
            match = replace(match, enabled=False)
        elif len(parts) == 2:
            try:
                mode = MatchMode(parts[0])
            except ValueError:
                print(f"Error: Unknown match mode '{parts[0]}'. Use 'percentage' or 'fixed-amount'.")
                return
            match = switch_match_mode(match, mode)
            match = replace(match, enabled=True, value=parse_amount(parts[1]))
        else:
            print("Usage: match off  or  match percentage|fixed-amount <value>")
            return
        self._update(replace(self.offer, retirement_match=match))

    def do_benefit(self, arg: str):
        """Enable, disable or set the amount of a catalog benefit.

        Usage: benefit <id> on|off|<amount>

        Setting an amount keeps the current enabled state. Use 'benefits'
        to list the ids.
        """
        parts = arg.split()
        if len(parts) != 2:
            print("Usage: benefit <id> on|off|<amount>")
            return
        benefit_id, value = parts
        current = self.offer.benefits.get(benefit_id)
        if current is None:
            print(f"Error: Unknown benefit '{benefit_id}'")
            print("Use 'benefits' to see available benefit ids.")
            return
        if value in ('on', 'off'):
            selection = replace(current, enabled=value == 'on')
        else:
            selection = BenefitSelection(enabled=current.enabled, amount=parse_amount(value))
        benefits = dict(self.offer.benefits)
        benefits[benefit_id] = selection
        self._update(replace(self.offer, benefits=benefits))

    def do_custom(self, arg: str):
        """Manage custom benefits.

        Usage: custom add <name> <amount>   (amount may be negative)
               custom remove <number>
               custom list
        """
        parts = arg.split()
        if not parts or parts[0] == 'list':
            if not self.offer.custom_benefits:
                print("No custom benefits.")
                return
            for i, custom in enumerate(self.offer.custom_benefits, 1):
                print(f"  {i}. {custom.name or 'Custom Benefit':<30} {format_currency(custom.amount):>12}")
            return

        if parts[0] == 'add' and len(parts) >= 3:
            name = ' '.join(parts[1:-1])
            custom = new_custom_benefit(name=name, amount=parse_amount(parts[-1], allow_negative=True))
            self._update(replace(self.offer, custom_benefits=self.offer.custom_benefits + (custom,)))
        elif parts[0] == 'remove' and len(parts) == 2:
            try:
                index = int(parts[1]) - 1
            except ValueError:
                index = -1
            if not 0 <= index < len(self.offer.custom_benefits):
                print(f"Error: No custom benefit number {parts[1]}")
                return
            remaining = self.offer.custom_benefits[:index] + self.offer.custom_benefits[index + 1:]
            self._update(replace(self.offer, custom_benefits=remaining))
        else:
            print("Usage: custom add <name> <amount> | custom remove <number> | custom list")

    def do_occupation(self, arg: str):
        """Select the occupation to compare the cash salary against.

        Usage: occupation <id>
               occupation none
        """
        occupation_id = arg.strip()
        if occupation_id in ('', 'none'):
            self._update(replace(self.offer, occupation_id=None))
            return
        if self.context.salary_catalog.find_occupation(occupation_id) is None:
            print(f"Error: Unknown occupation '{occupation_id}'")
            print("Use 'occupations' to see available occupation ids.")
            return
        self._update(replace(self.offer, occupation_id=occupation_id))

    def do_title(self, arg: str):
        """Set the job title shown for the 'other' occupation.

        Usage: title <job title>
        """
        self.offer = replace(self.offer, custom_job_title=arg.strip())
        print(f"Job title: {self.breakdown().job_title or '(none)'}")

    def do_metro(self, arg: str):
        """Select a metro area. The region is set to the metro's region.

        Usage: metro <id>
               metro none
        """
        metro_id = arg.strip()
        if metro_id in ('', 'none'):
            self._update(with_region_for_metro(self.offer, self.context.salary_catalog, None))
            return
        metro = self.context.salary_catalog.find_metro_area(metro_id)
        if metro is None:
            print(f"Error: Unknown metro area '{metro_id}'")
            print("Use 'metros' to see available metro area ids.")
            return
        print(f"Region set to '{metro.region}'")
        self._update(with_region_for_metro(self.offer, self.context.salary_catalog, metro_id))

    def do_region(self, arg: str):
        """Select a region. A selected metro area still takes precedence.

        Usage: region national|northeast|midwest|south|west
        """
        region_id = arg.strip() or NATIONAL
        if region_id not in REGION_IDS:
            print(f"Error: Unknown region '{region_id}'. Expected one of: {', '.join(REGION_IDS)}")
            return
        self._update(replace(self.offer, region_id=region_id))

    def do_year(self, arg: str):
        """Choose the year of the contribution limits used for warnings.

        Usage: year [year]    (no argument means the latest year)
        """
        if not arg.strip():
            self.limits_year = None
        else:
            try:
                year = int(arg.strip())
                self.context.contribution_limits.for_year(year)
            except ValueError as e:
                print(f"Error: {e}")
                return
            self.limits_year = year
        print(f"Using {self.breakdown().limits_year} contribution limits")

    def do_load(self, arg: str):
        """Load an offer from input-parameters.

        Usage: load <offer_name>

        If no offer name is given, lists the available offers.
        """
        offer_name = arg.strip()
        if not offer_name:
            print("Please specify an offer name.")
            print("Available offers:")
            for item in self._get_available_offers():
                print(f"  - {item}")
            return

        try:
            offer, limits_year = self.context.load_offer(offer_name)
        except FileNotFoundError as e:
            print(f"Error: {e}")
            return
        except ValueError as e:
            print(f"Error loading offer: {e}")
            return
        self.offer_name = offer_name
        self.limits_year = limits_year
        print(f"Offer '{offer_name}' loaded successfully!")
        self._update(offer)

    # Output

    def do_get(self, arg: str):
        """Query calculated field(s).

        Usage: get <fields>

        Arguments:
            fields - Comma-separated list of field names

        Examples:
            get total_compensation
            get cash_salary, market_salary, salary_difference_percent
        """
        field_names = [f.strip() for f in arg.split(',') if f.strip()]
        if not field_names:
            print("Error: Please specify at least one field to query.")
            print("Usage: get <fields>")
            return

        invalid_fields = [f for f in field_names if f not in self.available_fields]
        if invalid_fields:
            print(f"Error: Unknown field(s): {', '.join(invalid_fields)}")
            print("Use 'fields' command to see available field names.")
            return

        FieldsRenderer(field_names, self.offer_name.upper() if self.offer_name else None).render(self.breakdown())

    def do_fields(self, arg: str):
        """List all available fields that can be queried.

        Usage: fields [field_name]

        If a field name is provided, shows detailed info for that field.
        Otherwise, shows all fields grouped by category.
        """
        if arg.strip():
            field_name = arg.strip()
            if field_name not in self.available_fields:
                print(f"Error: Unknown field '{field_name}'")
                print("Use 'fields' without arguments to see all available fields.")
                return
            info = FIELD_METADATA[field_name]
            print(f"\n{field_name}:")
            print(f"  Short name: {info.short_name}")
            print(f"  Description: {info.description}")
            print()
            return

        print("\nAvailable fields:")
        print("=" * 70)
        for category, fields in FIELD_CATEGORIES.items():
            print(f"\n{category}:")
            for field in fields:
                print(f"  {field:<28} [{get_short_name(field):<16}] {get_description(field)}")
        print()

    def do_render(self, arg: str):
        """Render the current offer.

        Usage: render [mode]

        If no mode is specified, lists the available modes.
        """
        mode = arg.strip()
        if not mode:
            print("\nAvailable render modes:")
            for name in RENDERER_REGISTRY:
                print(f"  {name}")
            print()
            return
        renderer_class = RENDERER_REGISTRY.get(mode)
        if renderer_class is None:
            print(f"Error: Unknown render mode '{mode}'")
            print(f"Available modes: {', '.join(RENDERER_REGISTRY)}")
            return
        renderer_class().render(self.breakdown())

    def do_show(self, arg: str):
        """Show the total compensation summary.

        Usage: show
        """
        SummaryRenderer().render(self.breakdown())

    # Reference tables

    def _catalog(self) -> CatalogRenderer:
        return CatalogRenderer(self.context.salary_catalog, self.context.benefit_catalog,
                               self.context.contribution_limits)

    def do_occupations(self, arg: str):
        """List the occupations and their national average salary."""
        self._catalog().render_occupations()

    def do_metros(self, arg: str):
        """List the metro areas, optionally for one region.

        Usage: metros [region]
        """
        self._catalog().render_metro_areas(arg.strip() or None)

    def do_regions(self, arg: str):
        """List the regions."""
        self._catalog().render_regions()

    def do_benefits(self, arg: str):
        """List the benefit types and their default amounts."""
        self._catalog().render_benefits()

    def do_limits(self, arg: str):
        """List the contribution limits for every year."""
        self._catalog().render_limits()

    def do_help(self, arg: str):
        """Show help for available commands."""
        if arg:
            super().do_help(arg)
        else:
            print("""
Available Commands:
==================

  Offer:
    load <offer_name>             Load an offer from input-parameters
    new                           Start from a blank offer
    cash <amount>                 Set the annual cash salary
    equity on|off                 Turn the equity grant on or off
    equity <shares> <strike> <fmv>
                                  Set the equity grant
    match off                     Turn the retirement match off
    match percentage <percent>    Match as a percent of cash salary
    match fixed-amount <amount>   Match as an annual amount
    benefit <id> on|off|<amount>  Enable, disable or set a benefit
    custom add <name> <amount>    Add a custom benefit (may be negative)
    custom remove <number>        Remove a custom benefit
    custom list                   List custom benefits
    occupation <id>|none          Select the occupation for the market comparison
    title <job title>             Job title for the 'other' occupation
    metro <id>|none               Select a metro area (also sets the region)
    region <id>                   Select a region
    year [year]                   Contribution limits year for warnings

  Results:
    show                          Total compensation summary
    get <fields>                  Query calculated fields (comma-separated)
    fields [field]                List available fields
    render [mode]                 Print a report: Summary, Benefits,
                                  MarketComparison, Composition

  Reference data:
    occupations, metros [region], regions, benefits, limits

  help [command]                  Show this help message or help for a command
  exit, quit                      Exit the shell
""")

    def do_exit(self, arg: str):
        """Exit the shell."""
        print("Goodbye!")
        return True

    def do_quit(self, arg: str):
        """Exit the shell."""
        return self.do_exit(arg)

    def do_EOF(self, arg: str):
        """Handle Ctrl+D to exit."""
        print()  # Print newline for clean exit
        return self.do_exit(arg)

    def emptyline(self):
        """Do nothing on empty line."""
        pass

    def default(self, line: str):
        """Handle unknown commands."""
        print(f"Unknown command: {line}")
        print("Type 'help' for available commands.")

    def complete_get(self, text, line, begidx, endidx):
        """Tab completion for the get command.

        Matches field names containing the text anywhere (case-insensitive substring match).
        """
        if not text:
            return self.available_fields
        text_lower = text.lower()
        return [f for f in self.available_fields if text_lower in f.lower()]

    def complete_fields(self, text, line, begidx, endidx):
        return self.complete_get(text, line, begidx, endidx)

    def complete_render(self, text, line, begidx, endidx):
        return [m for m in RENDERER_REGISTRY if m.startswith(text)]

    def complete_load(self, text, line, begidx, endidx):
        return [o for o in self._get_available_offers() if o.startswith(text)]

    def complete_benefit(self, text, line, begidx, endidx):
        return [b for b in self.offer.benefits if b.startswith(text)]

    def complete_occupation(self, text, line, begidx, endidx):
        return [o.id for o in self.context.salary_catalog.list_occupations() if o.id.startswith(text)]

    def complete_metro(self, text, line, begidx, endidx):
        return [m.id for m in self.context.salary_catalog.list_metro_areas() if m.id.startswith(text)]

    def complete_region(self, text, line, begidx, endidx):
        return [r for r in REGION_IDS if r.startswith(text)]


def main():
    offer_name = sys.argv[1] if len(sys.argv) > 1 else None
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s %(name)s: %(message)s', stream=sys.stderr)

    shell = CompensationShell()
    if offer_name:
        try:
            offer, limits_year = shell.context.load_offer(offer_name)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}")
            sys.exit(1)
        shell.offer = offer
        shell.offer_name = offer_name
        shell.limits_year = limits_year
        print(f"Offer '{offer_name}' loaded successfully!")
    shell.cmdloop()


if __name__ == "__main__":
    main()
