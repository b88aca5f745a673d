"""
VERTEX-WELD - Doppelte Vertices eines Meshes zusammenführen

Main Entry Point: Mesh laden, Vertices innerhalb der Toleranz verschmelzen,
Faces umschreiben und Ergebnis speichern.

Benötigte Pakete:
  pip install numpy scipy pyvista

Usage:
  python weld_mesh.py input.obj output.obj --tolerance 1e-3
"""

import argparse
import sys

from vertex_weld import config
from vertex_weld.errors import VertexWeldError
from vertex_weld.io.obj import load_mesh, save_mesh
from vertex_weld.mesh.duplicated_vertex_removal import DuplicatedVertexRemoval
from vertex_weld.utils.timing import StepTimer


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Führt doppelte Mesh-Vertices innerhalb einer Toleranz zusammen.")
    parser.add_argument("input", help="Eingabe-Mesh (.obj oder jedes von PyVista lesbare Format)")
    parser.add_argument("output", help="Ausgabe-Mesh (.obj oder jedes von PyVista schreibbare Format)")
    parser.add_argument(
        "--tolerance", type=float, default=config.DEFAULT_TOLERANCE, help="Maximaler Abstand für identische Vertices"
    )
    parser.add_argument("--dim", type=int, default=3, choices=(2, 3), help="Dimension der Vertices (2 = planar)")
    parser.add_argument("--backend", default=None, choices=config.PROXIMITY_BACKENDS, help="Nachbarsuche")
    return parser.parse_args(argv)


def main(argv=None):
    """Hauptfunktion - koordiniert Laden, Deduplizierung und Export."""
    args = parse_args(argv)

    print("=" * 60)
    print("VERTEX-WELD - Doppelte Vertices zusammenführen")
    print("=" * 60)

    timer = StepTimer()

    timer.begin("Lade Mesh")
    vertices, faces = load_mesh(args.input, dim=args.dim)
    print(f"  {len(vertices)} Vertices, {len(faces)} Faces aus {args.input}")

    timer.begin("Verschmelze Vertices")
    try:
        remover = DuplicatedVertexRemoval(vertices, faces).run(args.tolerance, backend=args.backend)
    except VertexWeldError as e:
        print(f"❌ FEHLER: {e}")
        return 1
    new_vertices = remover.get_vertices()
    new_faces = remover.get_faces()
    print(f"  ✓ {remover.num_removed} Vertices entfernt ({len(vertices)} → {len(new_vertices)})")

    timer.begin("Speichere Mesh")
    save_mesh(args.output, new_vertices, new_faces)
    print(f"  ✓ {args.output} erfolgreich erstellt!")

    timer.report()
    return 0


if __name__ == "__main__":
    sys.exit(main())
