"""
Demo Manager - Scaffolds a sample dataset.

Writes a small technology ecosystem (web, data and infrastructure tools)
in the on-disk format read by ``JsonDataProvider`` so that a first run of
``techgraph stats`` or ``techgraph layout`` has something to show.
"""

import json
import logging
from pathlib import Path

from ..config import DATA_FILE, LINKS_FILE, META_FILE

logger = logging.getLogger(__name__)


class DemoManager:
    """
    Manages the creation of the demo dataset.
    """

    NODES = [
        {
            "id": "Python", "group": "language",
            "shortDesc": "General-purpose scripting language",
            "fullDesc": "Readable, batteries-included language used from web backends to data science.",
            "difficulty": "Easy", "learnTime": "1-2 months", "marketShare": "28%",
            "useCases": ["Web backends", "Data analysis", "Automation"],
        },
        {
            "id": "TypeScript", "group": "language",
            "shortDesc": "Typed superset of JavaScript",
            "fullDesc": "Adds static types to JavaScript and compiles to plain JS.",
            "difficulty": "Medium", "learnTime": "1 month", "marketShare": "12%",
            "useCases": ["Frontend apps", "Node.js services"],
        },
        {
            "id": "Django", "group": "framework",
            "shortDesc": "Batteries-included Python web framework",
            "fullDesc": "ORM, admin, auth and templating in one package.",
            "difficulty": "Medium", "learnTime": "2 months", "marketShare": "15%",
            "useCases": ["Content sites", "Internal tools"],
        },
        {
            "id": "React", "group": "framework",
            "shortDesc": "Component-based UI library",
            "fullDesc": "Declarative UI library built around components and a virtual DOM.",
            "difficulty": "Medium", "learnTime": "2 months", "marketShare": "40%",
            "useCases": ["Single-page apps", "Dashboards"],
        },
        {
            "id": "PostgreSQL", "group": "database",
            "shortDesc": "Relational database",
            "fullDesc": "Open-source relational database with strong SQL compliance.",
            "difficulty": "Medium", "learnTime": "1-3 months", "marketShare": "17%",
            "useCases": ["Transactional data", "Geospatial queries"],
        },
        {
            "id": "Redis", "group": "database",
            "shortDesc": "In-memory key-value store",
            "fullDesc": "Data-structure server commonly used for caching and queues.",
            "difficulty": "Easy", "learnTime": "2 weeks", "marketShare": "9%",
            "useCases": ["Caching", "Rate limiting", "Pub/sub"],
        },
        {
            "id": "Docker", "group": "devops",
            "shortDesc": "Container runtime",
            "fullDesc": "Packages applications with their dependencies into portable images.",
            "difficulty": "Medium", "learnTime": "1 month", "marketShare": "55%",
            "useCases": ["Local environments", "Deployment"],
        },
        {
            "id": "Kubernetes", "group": "devops",
            "shortDesc": "Container orchestration platform",
            "fullDesc": "Schedules and scales containers across a cluster.",
            "difficulty": "Hard", "learnTime": "3-6 months", "marketShare": "35%",
            "useCases": ["Microservices", "Autoscaling"],
        },
    ]

    LINKS = [
        {"source": "Python", "target": "Django", "strength": 0.9},
        {"source": "TypeScript", "target": "React", "strength": 0.8},
        {"source": "Django", "target": "PostgreSQL", "strength": 0.7},
        {"source": "Django", "target": "Redis", "strength": 0.4},
        {"source": "Docker", "target": "Kubernetes", "strength": 0.9},
        {"source": "PostgreSQL", "target": "Docker", "strength": 0.3},
        {"source": "Python", "target": "Docker", "strength": 0.3},
    ]

    META = {
        "groupLabels": {
            "language": "Languages",
            "framework": "Frameworks",
            "database": "Databases",
            "devops": "DevOps",
        },
        "groupIcons": {
            "language": "💻",
            "framework": "🧩",
            "database": "🗄️",
            "devops": "🚀",
        },
        "groupColors": {
            "language": "#3B82F6",
            "framework": "#8B5CF6",
            "database": "#10B981",
            "devops": "#F59E0B",
        },
    }

    def __init__(self, root_dir: Path):
        self.root_dir = root_dir

    def provision(self) -> Path:
        """
        Write the demo dataset.

        Returns:
            Path: The directory holding the three dataset files.
        """
        demo_dir = self.root_dir / "techgraph-demo"
        demo_dir.mkdir(parents=True, exist_ok=True)

        self._write(demo_dir / DATA_FILE, {"nodes": self.NODES})
        self._write(demo_dir / LINKS_FILE, {"links": self.LINKS})
        self._write(demo_dir / META_FILE, self.META)

        logger.info(f"Demo dataset written to {demo_dir}")
        return demo_dir

    @staticmethod
    def _write(path: Path, data: dict) -> None:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
