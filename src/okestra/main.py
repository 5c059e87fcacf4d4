import argparse
import logging
import sys
from importlib.metadata import version
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .controllers.network import distribute
from .controllers.status import StatusProjector
from .errors import OkestraError
from .logger import logger
from .store import ClusterStore


def _cmd_distribute(args: argparse.Namespace, console: Console) -> int:
    dist = distribute(args.count, args.subnets)
    if not dist.distributable:
        console.print(
            f"[yellow]{args.count} instances cannot be distributed over "
            f"{len(args.subnets)} worker subnets (need at least 3).[/yellow]"
        )
        return 1

    table = Table(title=f"{args.count} instances")
    table.add_column("Subnet", style="cyan")
    table.add_column("Instances", justify="right")
    for subnet in dist.subnet_ids:
        table.add_row(subnet, str(dist.quantity_per_subnet))
    console.print(table)
    return 0


def _cmd_status(args: argparse.Namespace, console: Console) -> int:
    store = ClusterStore(args.store)
    status = StatusProjector(store.load(args.cluster_id)).status()

    if args.json:
        console.print_json(status.model_dump_json())
        return 0

    console.print(
        f"[bold]{status.name}[/bold] ({status.location}) "
        f"{status.status} {status.status_message}".rstrip()
    )
    table = Table(title=f"Node pools, Kubernetes {status.version}")
    table.add_column("Pool", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Shape")
    table.add_column("Image")
    table.add_column("Version")
    for name, np in status.node_pools.items():
        table.add_row(name, str(np.count), np.instance_type, np.image, np.version)
    console.print(table)
    return 0


def _cmd_list(args: argparse.Namespace, console: Console) -> int:
    store = ClusterStore(args.store)
    table = Table(title="Clusters")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Location")
    table.add_column("Status")
    table.add_column("VCN")
    for c in store.list_clusters():
        vcn = c.oke.vcn_id or "-"
        table.add_row(str(c.id), c.name, c.location, c.status.value, vcn)
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Okestra: Oracle Container Engine cluster lifecycle tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview how 9 workers spread over a VCN's worker subnets
  okestra distribute 9 subnet-a subnet-b subnet-c subnet-d

  # Show the stored status of cluster 1
  okestra status 1
""",
    )
    try:
        ver = version("okestra")
    except Exception:
        ver = "unknown"
    parser.add_argument("--version", action="version", version=f"Okestra v{ver}")
    parser.add_argument("--store", type=Path, help="Path to the cluster store file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("distribute", help="Compute a node pool subnet distribution")
    p.add_argument("count", type=int, help="Total instances in the pool")
    p.add_argument("subnets", nargs="+", help="Worker subnet ids, in VCN order")
    p.set_defaults(func=_cmd_distribute)

    p = sub.add_parser("status", help="Show the stored status of a cluster")
    p.add_argument("cluster_id", type=int)
    p.add_argument("--json", action="store_true", help="Output as JSON")
    p.set_defaults(func=_cmd_status)

    p = sub.add_parser("list", help="List stored clusters")
    p.set_defaults(func=_cmd_list)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    console = Console()
    try:
        return int(args.func(args, console))
    except OkestraError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console = Console(stderr=True)
        console.print("\n[bold red]Operation cancelled by user.[/bold red]")
        sys.exit(130)
