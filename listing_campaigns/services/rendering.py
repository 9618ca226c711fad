"""Rendering service - drive the render engine for every recommended template."""

import logging
import time
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..clients.render import RenderClient, RenderError
from ..config import OUTPUT_PATH
from ..engine.mapping import RegionMappingEngine
from ..models.campaign import RenderResult
from ..models.product import ProductInfo
from ..models.suggestion import SuggestionBundle
from ..models.template import TemplateDescriptor
from .templates import TemplateRegistry

logger = logging.getLogger(__name__)

EXPORT_MIME_TYPE = "image/png"


class RenderService:
    """Render one PNG per recommended template, sequentially."""

    def __init__(
        self,
        client: RenderClient,
        registry: TemplateRegistry,
        engine: RegionMappingEngine | None = None,
        output_dir: Path | str = OUTPUT_PATH,
    ):
        self.client = client
        self.registry = registry
        self.engine = engine or RegionMappingEngine(registry)
        self.output_dir = Path(output_dir)

    def render_campaign(self, product: ProductInfo, bundle: SuggestionBundle) -> list[RenderResult]:
        """
        Render every template in `bundle.recommended_templates`.

        Failures never stop the loop; each becomes a failed RenderResult.
        """
        logger.info(
            f"Starting campaign image generation: {bundle.tier.value}, "
            f"{len(bundle.recommended_templates)} templates, {len(product.images)} images"
        )
        results = []

        for index, name in enumerate(bundle.recommended_templates):
            pinned_image = product.images[index % len(product.images)] if product.images else None
            descriptor = self.registry.by_name(name)

            if descriptor is None:
                logger.warning(f"Template not found in catalog: {name}")
                results.append(RenderResult(template=name, success=False, error="Template not found"))
                continue

            if not self.registry.is_available(name):
                path = self.registry.resource_path(descriptor)
                logger.warning(f"Template not found: {path}")
                results.append(RenderResult(
                    template=name,
                    success=False,
                    format=descriptor.format.value,
                    error=f"Template file not found: {descriptor.resource}",
                ))
                continue

            try:
                results.append(self.render_template(descriptor, product, bundle, index, pinned_image))
            except (RenderError, OSError, ValueError) as e:
                logger.error(f"Error generating image for template {name}: {e}")
                results.append(RenderResult(
                    template=name,
                    success=False,
                    format=descriptor.format.value,
                    error=str(e),
                ))
            except Exception as e:
                logger.exception(f"Unexpected error generating image for template {name}")
                results.append(RenderResult(
                    template=name,
                    success=False,
                    format=descriptor.format.value,
                    error=str(e),
                ))

        succeeded = sum(1 for r in results if r.success)
        logger.info(f"Campaign generation completed: {succeeded}/{len(results)} successful")
        return results

    def render_template(
        self,
        descriptor: TemplateDescriptor,
        product: ProductInfo,
        bundle: SuggestionBundle,
        index: int = 0,
        pinned_image: str | None = None,
    ) -> RenderResult:
        """
        Open a session on the template, apply mutations and export a PNG.

        Raises:
            RenderError: render engine call failed or timed out.
            ValueError: exported bytes are not a decodable image.
            OSError: output file could not be written.
        """
        with self.client.session(self.registry.resource_path(descriptor)) as session:
            regions = session.snapshot()
            mutations = self.engine.map_regions(descriptor, bundle, product, regions, index, pinned_image)
            for mutation in mutations:
                session.apply(mutation.region, mutation.to_properties())
            data = session.export(EXPORT_MIME_TYPE)

        self._verify_image(data)

        file_name = f"{bundle.tier.value}_{descriptor.name}_{int(time.time() * 1000)}.png"
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / file_name
        output_path.write_bytes(data)
        logger.info(f"Image generated successfully: {output_path}")

        return RenderResult(
            template=descriptor.name,
            success=True,
            format=descriptor.format.value,
            output_path=str(output_path),
            web_path=f"/output/{file_name}",
            message="Image generated successfully",
        )

    def _verify_image(self, data: bytes) -> None:
        if not data:
            raise ValueError("Render engine returned an empty image")
        try:
            with Image.open(BytesIO(data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ValueError(f"Exported image could not be decoded: {e}") from e
