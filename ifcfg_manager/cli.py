import argparse
import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ifcfg_manager.errors import IfcfgError
from ifcfg_manager.interface import IfcfgInterface
from ifcfg_manager.settings import Settings, load_settings

console = Console()


def _printable(value: str) -> str:
    # Undecodable bytes from the file are shown as U+FFFD
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class IfcfgCLI:
    def __init__(self, settings: Settings):
        self.settings = settings

    def _print_error(self, message: str):
        print(f"❌ Error: {message}", file=sys.stderr)

    def _print_success(self, message: str):
        print(f"✅ {message}")

    def _open(self, name: str) -> IfcfgInterface:
        return IfcfgInterface(name, settings=self.settings)

    def _show_diff(self, diff_text: str) -> None:
        if not diff_text:
            console.print("[green]No changes detected[/green]")
            return

        console.print("\n[bold]Configuration Changes:[/bold]\n")
        for line in diff_text.split("\n"):
            if line.startswith("+") and not line.startswith("+++"):
                console.print(f"[green]{escape(line)}[/green]")
            elif line.startswith("-") and not line.startswith("---"):
                console.print(f"[red]{escape(line)}[/red]")
            elif line.startswith("@@"):
                console.print(f"[cyan]{escape(line)}[/cyan]")
            else:
                console.print(escape(line))

    def _commit(self, iface: IfcfgInterface, dry_run: bool) -> int:
        if dry_run:
            self._show_diff(iface.pending_diff())
            return 0

        if iface.save():
            self._print_success(f"Configuration applied to {iface.name}")
            return 0

        self._print_error(
            f"{iface.name} could not be restarted; previous configuration restored "
            f"({iface.last_save_state.value})"
        )
        return 1

    def show(self, name: str) -> int:
        """Show the keys of an interface configuration"""
        iface = self._open(name)

        table = Table(title=str(iface.path))
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for key, value in iface.config.items():
            shown = escape(_printable(value)) if value else "[dim](blank)[/dim]"
            table.add_row(escape(_printable(key)), shown)
        console.print(table)
        return 0

    def static(
        self,
        name: str,
        ip: str,
        netmask: str,
        gateway: str,
        dns: list[str] | None = None,
        search: list[str] | None = None,
        dry_run: bool = False,
    ) -> int:
        """Apply a static address configuration"""
        iface = self._open(name)

        if dry_run:
            iface.stage_static(ip, netmask, gateway, dns or [], search)
            return self._commit(iface, dry_run=True)

        if iface.apply_static(ip, netmask, gateway, dns or [], search):
            self._print_success(f"Static configuration applied to {iface.name}")
            return 0

        self._print_error(
            f"{iface.name} could not be restarted; previous configuration restored "
            f"({iface.last_save_state.value})"
        )
        return 1

    def dhcp(self, name: str, dry_run: bool = False) -> int:
        """Switch an interface to DHCP"""
        iface = self._open(name)
        iface.enable_dhcp()
        return self._commit(iface, dry_run)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ifcfg-manager",
        description="Manage ifcfg network interface configuration files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ifcfg-manager show eth0
  ifcfg-manager static eth0 --ip 10.0.0.5 --netmask 255.255.255.0 --gateway 10.0.0.1 --dns 8.8.8.8
  ifcfg-manager static eth0 --ip 10.0.0.5 --netmask 255.255.255.0 --gateway 10.0.0.1 --dry-run
  ifcfg-manager dhcp eth0

Environment Variables:
  IFCFG_CONFIG_FILE      Settings file (default: ~/.ifcfg-manager/config.yaml)
  IFCFG_CONFIG_DIR       Directory holding ifcfg-* files
  IFCFG_LOCK_DIR         Directory for lock files
  IFCFG_LOCK_TIMEOUT     Seconds to wait for the interface lock
  IFCFG_COMMAND_TIMEOUT  Seconds to wait for ifup/ifdown
        """,
    )
    parser.add_argument("--config", help="Path to the settings file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Show an interface configuration")
    show_parser.add_argument("interface", help="Interface name")

    static_parser = subparsers.add_parser("static", help="Configure a static address")
    static_parser.add_argument("interface", help="Interface name")
    static_parser.add_argument("--ip", required=True, help="IP address")
    static_parser.add_argument("--netmask", required=True, help="Subnet mask")
    static_parser.add_argument("--gateway", required=True, help="Gateway address")
    static_parser.add_argument(
        "--dns", nargs="+", default=None, metavar="SERVER", help="Up to two DNS servers"
    )
    static_parser.add_argument(
        "--search", nargs="+", default=None, metavar="DOMAIN", help="DNS search domains"
    )
    static_parser.add_argument(
        "--dry-run", action="store_true", help="Show changes without applying them"
    )

    dhcp_parser = subparsers.add_parser("dhcp", help="Configure the interface for DHCP")
    dhcp_parser.add_argument("interface", help="Interface name")
    dhcp_parser.add_argument(
        "--dry-run", action="store_true", help="Show changes without applying them"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        cli = IfcfgCLI(load_settings(args.config))

        if args.command == "show":
            return cli.show(args.interface)
        elif args.command == "static":
            return cli.static(
                args.interface,
                ip=args.ip,
                netmask=args.netmask,
                gateway=args.gateway,
                dns=args.dns,
                search=args.search,
                dry_run=args.dry_run,
            )
        elif args.command == "dhcp":
            return cli.dhcp(args.interface, dry_run=args.dry_run)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\n❌ Operation cancelled by user", file=sys.stderr)
        return 130
    except IfcfgError as e:
        print(f"❌ Error: {e.user_message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
