# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of vibograph, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import re

from vibograph.graph.graph import Commit, EdgeType, GraphLayout, GraphRow

LANE_SPACING = 2
"Text columns per lane."

NODE_GLYPHS = "╳┷┯┿"
"Indexed by hasParents << 1 | hasChildren."


class GraphDiagram:
    @staticmethod
    def parseDefinition(text: str) -> tuple[list[Commit], set[str]]:
        """
        Parse a one-liner graph definition into a commit sequence.

        Each whitespace-separated token is a chain of commits, each commit
        being the first parent of the previous one. The last commit in the
        chain may list its own parents after a colon. For example,
        "m:a,b a:z b:z z" is a merge commit with two branches that fork from z.
        """
        sequence = []
        seen = set()
        defined = set()
        heads = set()

        for token in re.split(r"\s+", text):
            token = token.strip()
            if not token:
                continue

            split = token.split(":")
            if not 1 <= len(split) <= 2 or not split[0] or "," in split[0]:
                raise ValueError(f"malformed chain: {token}")

            try:
                if "-" in split[1]:
                    raise ValueError(f"malformed root parents: {token}")
                rootParents = [p for p in split[1].split(",") if p]
            except IndexError:
                rootParents = []

            chain = split[0].split("-")
            parents = [[c] for c in chain[1:]] + [rootParents]

            for commit, commitParents in zip(chain, parents):
                if commit in defined:
                    raise ValueError(f"commit appears twice in sequence: {commit}")
                defined.add(commit)
                sequence.append(Commit(hash=commit, parents=tuple(commitParents)))
                if commit not in seen:
                    heads.add(commit)
                seen.update(commitParents)

        return sequence, heads

    @staticmethod
    def diagram(layout: GraphLayout, row0=0, maxRows=-1, verbose=False) -> str:
        """
        Draw the layout with box-drawing characters, one line per commit plus
        one line below each commit that has merge-in or branch-out edges.
        The commit hash (and, in verbose mode, the row index and colorId)
        is printed in the left margin.
        """
        if row0 >= len(layout.rows):
            return f"Won't draw graph because it's empty below row {row0}!"

        rows = layout.rows[row0:]
        if maxRows >= 0:
            rows = rows[:maxRows]
        if not rows:
            return ""

        lines = []
        for rowIndex, row in enumerate(rows, start=row0):
            margin = [str(row.commit.hash)]
            if verbose:
                margin = [f"c{row.colorId}", str(rowIndex)] + margin
            lines.append((margin, GraphDiagram.nodeLine(row)))

            connectorLine = GraphDiagram.connectorLine(row)
            if connectorLine:
                lines.append(([], connectorLine))

        return GraphDiagram.joinLines(lines)

    @staticmethod
    def nodeLine(row: GraphRow) -> str:
        glyphs = {e.fromLane: "│" for e in row.edges if e.type == EdgeType.VERTICAL}
        glyphs[row.lane] = NODE_GLYPHS[row.hasParents << 1 | row.hasChildren]
        return GraphDiagram.drawLanes(glyphs)

    @staticmethod
    def connectorLine(row: GraphRow) -> str:
        home = row.lane
        connectors = [e for e in row.edges if e.type != EdgeType.VERTICAL]
        if not connectors:
            return ""

        left = min(home, *(e.toLane for e in connectors))
        right = max(home, *(e.toLane for e in connectors))

        # Passing lanes cross the horizontal rule
        glyphs = {e.fromLane: "┼" if left < e.fromLane < right else "│"
                  for e in row.edges if e.type == EdgeType.VERTICAL}

        for e in connectors:
            if e.type == EdgeType.BRANCH_OUT:
                glyphs[e.toLane] = "╮" if e.toLane > home else "╭"
            else:
                glyphs[e.toLane] = "┤" if e.toLane > home else "├"

        # The home lane goes on below unless the commit joined its first parent's lane
        continues = row.hasParents and not any(
            e.type == EdgeType.MERGE_IN and e.colorId == row.colorId for e in connectors)
        goesLeft = left < home
        goesRight = right > home
        if goesLeft and goesRight:
            glyphs[home] = "┼" if continues else "┴"
        elif goesLeft:
            glyphs[home] = "┤" if continues else "╯"
        else:
            glyphs[home] = "├" if continues else "╰"

        return GraphDiagram.drawLanes(glyphs, (left, right))

    @staticmethod
    def drawLanes(glyphs: dict[int, str], rule: tuple[int, int] | None = None) -> str:
        lastLane = max(glyphs)
        chars = [" "] * (lastLane * LANE_SPACING + 1)

        if rule:
            for i in range(rule[0] * LANE_SPACING, rule[1] * LANE_SPACING + 1):
                chars[i] = "─"

        for lane, glyph in glyphs.items():
            chars[lane * LANE_SPACING] = glyph

        return "".join(chars)

    @staticmethod
    def joinLines(lines: list[tuple[list[str], str]]) -> str:
        numColumns = max(len(margin) for margin, _ in lines)
        margins = [margin or [""] * numColumns for margin, _ in lines]
        widths = [max(len(m[c]) for m in margins) for c in range(numColumns)]

        text = []
        for margin, (_, art) in zip(margins, lines):
            prefix = "".join(m.rjust(w) + " " for m, w in zip(margin, widths))
            text.append((prefix + art).rstrip())
        return "\n".join(text)
