"""Coach persona and game catalogues."""

from dataclasses import dataclass

SYSTEM_PROMPT = """Kamu adalah AI Coach Valorant yang ahli dan berpengalaman. \
Kamu bisa berkomunikasi dalam bahasa Indonesia dan Inggris dengan lancar.

Kepribadian dan Gaya:
- Ramah, sabar, dan mendukung pemain untuk berkembang
- Memberikan saran yang praktis dan dapat diterapkan langsung
- Menggunakan terminologi Valorant yang tepat
- Bisa beradaptasi dengan level skill pemain (Iron sampai Radiant)

Keahlian Kamu:
- Strategi tim dan individual gameplay
- Rekomendasi agent berdasarkan map dan komposisi tim
- Tips aim training dan crosshair placement
- Map knowledge dan callouts
- Economy management dan buy strategies
- Positioning dan game sense
- Counter-strategi melawan agent tertentu
- Mental coaching dan mindset improvement

Selalu berikan:
1. Penjelasan yang mudah dipahami
2. Contoh konkret atau situasi spesifik
3. Tips yang bisa langsung dipraktikkan
4. Motivasi positif untuk terus berkembang

Jika pemain bertanya dalam bahasa Indonesia, jawab dalam bahasa Indonesia. \
Jika dalam bahasa Inggris, jawab dalam bahasa Inggris. Kamu juga bisa \
mencampur kedua bahasa jika diperlukan untuk menjelaskan terminologi Valorant.
"""


@dataclass(frozen=True)
class Agent:
    """A playable Valorant agent."""

    id: str
    name: str
    role: str


@dataclass(frozen=True)
class Rank:
    """A competitive rank."""

    id: str
    name: str
    tier: int


AGENTS: tuple[Agent, ...] = (
    Agent("jett", "Jett", "Duelist"),
    Agent("phoenix", "Phoenix", "Duelist"),
    Agent("sage", "Sage", "Sentinel"),
    Agent("sova", "Sova", "Initiator"),
    Agent("brimstone", "Brimstone", "Controller"),
    Agent("viper", "Viper", "Controller"),
    Agent("cypher", "Cypher", "Sentinel"),
    Agent("reyna", "Reyna", "Duelist"),
    Agent("killjoy", "Killjoy", "Sentinel"),
    Agent("breach", "Breach", "Initiator"),
    Agent("omen", "Omen", "Controller"),
    Agent("raze", "Raze", "Duelist"),
)

RANKS: tuple[Rank, ...] = (
    Rank("iron", "Iron", 1),
    Rank("bronze", "Bronze", 2),
    Rank("silver", "Silver", 3),
    Rank("gold", "Gold", 4),
    Rank("platinum", "Platinum", 5),
    Rank("diamond", "Diamond", 6),
    Rank("ascendant", "Ascendant", 7),
    Rank("immortal", "Immortal", 8),
    Rank("radiant", "Radiant", 9),
)

DEFAULT_AGENT = AGENTS[0]
DEFAULT_RANK = RANKS[3]
DEFAULT_PLAYER_NAME = "Agent"


def find_agent(agent_id: str | None) -> Agent | None:
    return next((a for a in AGENTS if a.id == agent_id), None)


def find_rank(rank_id: str | None) -> Rank | None:
    return next((r for r in RANKS if r.id == rank_id), None)


def greeting(display_name: str | None = None) -> str:
    """Greeting line shown above the chat."""
    if display_name:
        return f"Good evening, {display_name}"
    return "Good evening"
