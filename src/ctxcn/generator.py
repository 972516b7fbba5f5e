from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .generation import GenerationProfile, TypeCompiler, generate_client
from .ir import IRDocument, PeerContext
from .naming import module_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientSpec:
    server_name: str
    output_dir: Path


async def generate_client_file(
    spec: ClientSpec,
    ir: IRDocument,
    peer: PeerContext,
    profile: GenerationProfile,
    compiler: TypeCompiler | None = None,
) -> Path:
    """Generate a client module and write it into the output directory.

    The module is generated completely before anything is written, so a
    failing generation leaves the output directory untouched.
    """
    output = await generate_client(ir.tools, spec.server_name, peer, profile, compiler)

    spec.output_dir.mkdir(parents=True, exist_ok=True)
    path = spec.output_dir / f"{module_name(output.client_name)}.py"
    path.write_text(output.code, encoding="utf-8")
    logger.info("Wrote %s to %s", output.client_name, path)
    return path
