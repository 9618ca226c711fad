"""Physical region names shared by the stock templates."""

# logical role -> layer name inside the design file
STANDARD_REGIONS: dict[str, str] = {
    "title": "titulo_principal",
    "subtitle": "subtitulo",
    "price": "preco",
    "cta": "botao_cta",
    "image": "imagem_produto",
    "logo": "logo_empresa",
}

CANVAS_SIZES = {
    "feed": "1080x1080px (formato quadrado)",
    "story": "1080x1920px (formato vertical)",
}
