from __future__ import annotations

from typing import Optional

from domain.models import ClubRow, Snapshot, SnapshotType

FOOTMERCATO_HTML = """<html><head><title>Classement Ligue 1</title></head><body>
<h1>Classement Ligue 1 2025/2026</h1>
<table class="rankingTable">
  <thead>
    <tr><th>#</th><th>Equipe</th><th>Pts</th><th>J</th><th>Diff</th>
        <th>G</th><th>N</th><th>P</th><th>BP</th><th>BC</th></tr>
  </thead>
  <tbody>
    <tr>
      <td>1</td>
      <td><img alt="Logo" src="lens.png"/> <span class="short">Lens</span> <span class="long">Lens</span></td>
      <td>34</td><td>15</td><td>+13</td><td>10</td><td>4</td><td>1</td><td>28</td><td>15</td>
    </tr>
    <tr>
      <td>2</td>
      <td>Paris Saint-Germain</td>
      <td>33</td><td>15</td><td>+17</td><td>10</td><td>3</td><td>2</td><td>30</td><td>13</td>
    </tr>
    <tr><td colspan="10">Publicité</td></tr>
    <tr>
      <td>3</td>
      <td>Olympique de Marseille</td>
      <td>31</td><td>14</td><td>&minus;2</td><td>10</td><td>1</td><td>3</td><td>27</td>
    </tr>
  </tbody>
</table>
</body></html>"""

# Row 2 has no usable name, row 3 is a prompt label
MALFORMED_FOOTMERCATO_HTML = """<html><body><table>
<tr><td>1</td><td>Lens</td><td>34</td><td>15</td><td>+13</td><td>10</td><td>4</td><td>1</td><td>28</td><td>15</td></tr>
<tr><td>2</td><td>   </td><td>33</td><td>15</td><td>+17</td><td>10</td><td>3</td><td>2</td><td>30</td><td>13</td></tr>
<tr><td>3</td><td>Marseille</td><td>31</td><td>-</td><td>n/a</td><td>10</td><td>1</td><td>3</td><td>27</td><td>16</td></tr>
<tr><td>-</td><td>Sélectionner une équipe</td><td></td><td></td><td></td><td></td><td></td><td></td><td></td><td></td></tr>
</table></body></html>"""

PIPE_TEXT_HTML = """<html><body><pre>
| 1 | Logo Lens Lens | 34 | 15 | +13 | 10 | 4 | 1 | 28 | 15 |
| 2 | Paris Saint-Germain | 33 | 15 | +17 | 10 | 3 | 2 | 30 | 13 |
</pre></body></html>"""

# Standings live in the second table; the first one is navigation.
SECOND_TABLE_HTML = """<html><body>
<table><tr><td><a href="/">Accueil</a></td><td>Ligue 1</td></tr></table>
<table>
<tr><td>1</td><td><div><span>Lens</span></div></td><td>34</td><td>15</td><td>+13</td><td>10</td><td>4</td><td>1</td><td>28</td><td>15</td></tr>
<tr><td>2</td><td>Paris FC</td><td>20</td><td>15</td><td>-1</td><td>5</td><td>5</td><td>5</td><td>19</td><td>20</td></tr>
</table></body></html>"""

TRANSFERMARKT_HTML = """<html><body>
<div class="responsive-table">
<table class="items">
  <thead>
    <tr><th>#</th><th>&nbsp;</th><th>Club</th><th>Matchs</th><th>V</th><th>N</th><th>D</th>
        <th>Buts</th><th>+/-</th><th>Pts</th></tr>
  </thead>
  <tbody>
    <tr class="odd">
      <td class="rechts hauptlink">1</td>
      <td class="zentriert"><img alt="RC Lens" src="lens.png"/></td>
      <td class="hauptlink"><a href="/rc-lens/startseite/verein/826" title="RC Lens">RC Lens</a></td>
      <td class="zentriert">3</td><td class="zentriert">3</td><td class="zentriert">0</td>
      <td class="zentriert">0</td><td class="zentriert">7:1</td><td class="zentriert">6</td>
      <td class="zentriert">9</td>
    </tr>
    <tr class="even">
      <td class="rechts hauptlink">2</td>
      <td class="zentriert"><img alt="Paris Saint-Germain" src="psg.png"/></td>
      <td class="hauptlink"><a href="/paris-saint-germain/startseite/verein/583">Paris Saint-Germain</a></td>
      <td class="zentriert">3</td><td class="zentriert">2</td><td class="zentriert">1</td>
      <td class="zentriert">0</td><td class="zentriert">6:2</td><td class="zentriert">4</td>
      <td class="zentriert">7</td>
    </tr>
    <tr class="odd">
      <td class="rechts hauptlink">18</td>
      <td class="zentriert"><img alt="FC Metz" src="metz.png"/></td>
      <td class="hauptlink"><a href="/fc-metz/startseite/verein/347">FC Metz</a></td>
      <td class="zentriert">3</td><td class="zentriert">0</td><td class="zentriert">0</td>
      <td class="zentriert">3</td><td class="zentriert">1:8</td><td class="zentriert">-7</td>
      <td class="zentriert">0</td>
    </tr>
  </tbody>
</table>
</div>
</body></html>"""

# No <table> element at all; the second row is never closed.
TRANSFERMARKT_DRIFT_HTML = """<html><body><div class="grid">
<tr><th>#</th><th>Club</th><th>Pts</th></tr>
<tr class="odd"><td><span class="rank">1</span></td><td><a href="/rc-lens">RC Lens</a></td><td>3</td><td>9</td></tr>
<tr class="even"><td>2</td><td><a href="/paris-fc">Paris FC</a></td><td>3</td><td>5</td>
</div></body></html>"""


def club(name: str = "Lens", position: Optional[int] = 1, **stats) -> ClubRow:
    return ClubRow(position=position, name=name, **stats)


def snapshot(
    round: Optional[int] = None,
    snapshot_type: Optional[SnapshotType] = None,
    *,
    tag: str = "",
    source: str = "transfermarkt",
    date: Optional[str] = "2025-11-01T10:00:00.000Z",
    clubs=(),
    season: Optional[str] = "2025/2026",
) -> Snapshot:
    extra = {"tag": tag} if tag else {}
    return Snapshot(
        date=date,
        source=source,
        season=season,
        round=round,
        snapshot_type=snapshot_type,
        clubs=tuple(clubs),
        extra=extra,
    )
