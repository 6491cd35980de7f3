"""
Pytest configuration and shared fixtures for unity-auditor tests.
"""

import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator

import pytest

from unity_auditor.config import DEFAULT_CONFIG, AnalysisConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after test.

    Yields:
        Path to temporary directory
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sequential_config() -> AnalysisConfig:
    """Default configuration with the process pool disabled."""
    return DEFAULT_CONFIG.with_overrides(parallel=False)


SAMPLE_CS = """using System;
using UnityEngine;

namespace Game.Core
{
    // Central game state.
    public class GameManager : MonoBehaviour
    {
        public static GameManager Instance;
        [SerializeField] private int score = 0;
        public event Action<int> ScoreChanged;

        public int Score { get; private set; }

        private GameManager()
        {
        }

        private void Awake()
        {
            if (Instance == null)
            {
                Instance = this;
            }
            else
            {
                Destroy(gameObject);
            }
        }

        public void AddScore(int amount)
        {
            score += amount;
            NotifyScore();
        }

        private void NotifyScore()
        {
            ScoreChanged?.Invoke(score);
        }
    }

    public interface IDamageable
    {
        void TakeDamage(float amount);
        bool IsAlive { get; }
    }

    public struct DamageInfo
    {
        public float Amount;
        public string Source;
    }
}
"""

COMPLEX_CS = """using System.Collections.Generic;
using UnityEngine;

namespace Game.Enemies
{
    /// <summary>
    /// Spawns enemies.
    /// </summary>
    public class EnemyFactory
    {
        private readonly List<Enemy> pool = new List<Enemy>();

        public Enemy CreateEnemy(string kind, int level = 1)
        {
            switch (kind)
            {
                case "orc":
                    return new Enemy(level * 2);
                case "goblin":
                    return new Enemy(level);
                default:
                    return null;
            }
        }

        public IEnumerable<Enemy> Active => pool;
    }

    public class Enemy : Unit, IDamageable
    {
        private float health;

        public Enemy(int level) : base(level)
        {
            health = level * 10f;
        }

        public void TakeDamage(float amount)
        {
            health -= amount;
        }

        public bool IsAlive => health > 0;

        public abstract class Behaviour
        {
            public abstract void Tick(Enemy owner);
        }
    }

    public abstract class Unit
    {
        protected Unit(int level)
        {
        }
    }
}
"""

MALFORMED_CS = """using UnityEngine;

namespace Broken
{
    public class HalfWritten : MonoBehaviour
    {
        void Update()
        {
            if (true)
            {
                transform.position += Vector3.up;
"""


@pytest.fixture
def sample_cs_file(temp_dir: Path) -> Path:
    """A file with a MonoBehaviour singleton, an interface and a struct."""
    file_path = temp_dir / "GameManager.cs"
    file_path.write_text(SAMPLE_CS, encoding="utf-8")
    return file_path


@pytest.fixture
def complex_cs_file(temp_dir: Path) -> Path:
    """A file with a factory, inheritance, a nested class and constructors."""
    file_path = temp_dir / "Enemies.cs"
    file_path.write_text(COMPLEX_CS, encoding="utf-8")
    return file_path


@pytest.fixture
def malformed_cs_file(temp_dir: Path) -> Path:
    """A file whose class body is never closed."""
    file_path = temp_dir / "HalfWritten.cs"
    file_path.write_text(MALFORMED_CS, encoding="utf-8")
    return file_path


ProjectBuilder = Callable[..., Path]


@pytest.fixture
def make_unity_project(temp_dir: Path) -> ProjectBuilder:
    """Factory building a minimal Unity project tree.

    Call with a mapping of project-relative paths to file contents (str or
    bytes). ``Assets`` and ``ProjectSettings`` are always created.

    Returns:
        Builder returning the project root
    """

    def build(
        files: Dict[str, object] = None,
        folders: tuple = (),
        name: str = "SampleProject",
        version: str = "2022.3.10f1",
    ) -> Path:
        root = temp_dir / name
        (root / "Assets").mkdir(parents=True, exist_ok=True)
        (root / "ProjectSettings").mkdir(parents=True, exist_ok=True)
        (root / "ProjectSettings" / "ProjectVersion.txt").write_text(
            f"m_EditorVersion: {version}\n", encoding="utf-8"
        )
        for folder in folders:
            (root / folder).mkdir(parents=True, exist_ok=True)
        for relative, content in (files or {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(str(content), encoding="utf-8")
        return root

    return build
