"""
Display Application Service
"""
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from versenet.domain.models import NetworkReport, RankedVerse, Verse, VerseGraph


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class DisplayService:
    """
    Service for formatting and displaying network statistics in the terminal.
    """
    Colors = Colors

    def __init__(self, max_rows: int = 20, max_communities: int = 10):
        self.max_rows = max_rows
        self.max_communities = max_communities

    @staticmethod
    def colored(text: str, color: str, bold: bool = False) -> str:
        """Apply color to text."""
        style = Colors.BOLD if bold else ""
        return f"{style}{color}{text}{Colors.RESET}"

    @staticmethod
    def score_color(score: float) -> str:
        if score >= 0.75:
            return Colors.RED
        if score >= 0.5:
            return Colors.YELLOW
        if score >= 0.25:
            return Colors.BLUE
        return Colors.GRAY

    def print_header(self, title: str, char: str = "=", width: int = 78) -> None:
        """Print a formatted header."""
        print(f"\n{self.colored(char * width, Colors.CYAN)}")
        print(f"{self.colored(f' {title} '.center(width), Colors.CYAN, bold=True)}")
        print(f"{self.colored(char * width, Colors.CYAN)}")

    def print_subheader(self, title: str, char: str = "-", width: int = 78) -> None:
        """Print a formatted subheader."""
        print(f"\n{self.colored(f' {title} ', Colors.WHITE, bold=True)}")
        print(f"{self.colored(char * width, Colors.GRAY)}")

    # --- Report Display ---

    def display_overview(self, report: "NetworkReport") -> None:
        self.print_subheader("Network Overview")
        n = report.network
        print(f"  {'Total Verses:':<24} {n.node_count:,}")
        print(f"  {'Total References:':<24} {n.edge_count:,}")
        print(f"  {'Avg. References/Verse:':<24} {n.avg_degree:.2f}")
        print(f"  {'Median References:':<24} {n.median_degree}")
        print(f"  {'Max References:':<24} {n.max_degree}")
        print(f"  {'Network Density:':<24} {n.density * 100:.4f}%")
        print(f"  {'Reciprocity:':<24} {n.reciprocity * 100:.1f}%")

        if n.top_verses:
            print(f"\n  {self.colored('Top Most Connected Verses', Colors.WHITE, bold=True)}")
            for rank, v in enumerate(n.top_verses, 1):
                print(f"  {rank:>3}. {v.verse:<20} {v.refs:>5} refs")

    def display_ranking(self, title: str, rows: List["RankedVerse"], explanation: str = "",
                        statistics: Optional[Dict[str, float]] = None, percent: bool = True) -> None:
        self.print_subheader(title)
        if explanation:
            print(f"  {self.colored(explanation, Colors.GRAY)}")
        if statistics:
            self.display_statistics(statistics)
        if not rows:
            print(f"  {self.colored('No verses to show.', Colors.GRAY)}")
            return
        print(f"  {'#':>3}  {'Verse':<20} {'Refs':>6} {'Score':>9}")
        for rank, row in enumerate(rows[:self.max_rows], 1):
            value = f"{row.score * 100:.1f}%" if percent else f"{row.score:.3f}"
            print(f"  {rank:>3}. {row.verse:<20} {row.ref_count:>6} "
                  f"{self.colored(f'{value:>9}', self.score_color(row.score))}")

    def display_statistics(self, statistics: Dict[str, float]) -> None:
        """Summary of the whole score distribution behind a ranking."""
        summary = "  ".join(
            f"{name.capitalize()}: {statistics[name]:.4f}"
            for name in ("mean", "median", "std", "max") if name in statistics
        )
        print(f"  {self.colored(summary, Colors.GRAY)}")

    def display_communities(self, report: "NetworkReport") -> None:
        summary = report.communities
        self.print_subheader("Detected Communities")
        print(f"  Found {self.colored(str(summary.community_count), Colors.GREEN, bold=True)} "
              f"groups of tightly-connected verses.")
        for i, community in enumerate(summary.communities[:self.max_communities], 1):
            books = ", ".join(f"{book} ({count})" for book, count in community.groups.items())
            print(f"\n  {self.colored(f'Community {i}', Colors.MAGENTA, bold=True)}  "
                  f"{len(community.members)} verses")
            print(f"    Books: {books}")
            sample = " ".join(community.members[:5])
            more = len(community.members) - 5
            suffix = self.colored(f" +{more} more", Colors.GRAY) if more > 0 else ""
            print(f"    {sample}{suffix}")

    def display_report(self, report: "NetworkReport") -> None:
        """Display every section of a statistics report."""
        self.print_header("VERSE NETWORK STATISTICS")
        print(f"  {self.colored('Computed:', Colors.GRAY)} {report.timestamp}")
        self.display_overview(report)
        self.display_ranking(
            "Degree Centrality", report.centrality,
            "Verses with the most cross-references.",
            statistics=report.statistics.get("centrality"),
        )
        self.display_ranking(
            "Betweenness Centrality", report.betweenness,
            "Verses acting as bridges between different parts of the Bible.",
            statistics=report.statistics.get("betweenness"),
        )
        self.display_ranking(
            "Clustering Coefficient", [r for r in report.clustering if r.score > 0],
            "How interconnected a verse's neighbors are.",
            statistics=report.statistics.get("clustering"),
        )
        self.display_ranking(
            "Hub Verses", report.hubs,
            "High connectivity + low clustering = bridges between communities.",
            statistics=report.statistics.get("hubs"),
            percent=False,
        )
        self.display_communities(report)
        print()

    def display_path(self, graph: "VerseGraph", path: Optional[List[str]],
                     source: str, target: str, max_depth: int) -> None:
        self.print_subheader(f"Shortest Path: {source} -> {target}")
        if path is None:
            print(f"  {self.colored(f'No path within {max_depth} hops.', Colors.YELLOW)}")
            return
        labels = [graph.resolve(i).label for i in path]
        print(f"  {self.colored(' -> '.join(labels), Colors.GREEN)}")
        print(f"  {self.colored(f'{len(path) - 1} hops', Colors.GRAY)}")

    def display_verse(self, graph: "VerseGraph", verse: "Verse") -> None:
        """Show a verse and the verses it cross-references."""
        self.print_subheader(f"Verse: {verse.label}")
        references = graph.resolved_neighbors(verse.id)
        print(f"  {'Book:':<12} {verse.group}")
        print(f"  {'References:':<12} {verse.degree}")
        missing = verse.degree - len(references)
        if missing:
            print(f"  {self.colored(f'{missing} reference(s) not in the dataset', Colors.YELLOW)}")
        for neighbor in references:
            print(f"    {self.colored('->', Colors.GRAY)} {neighbor.label}")
