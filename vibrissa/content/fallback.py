"""Bundled content shown until (or instead of) remote content."""

from __future__ import annotations
from typing import Tuple

from ..types import ArtistStory, GalleryItem

LOCAL_SKETCHES: Tuple[GalleryItem, ...] = (
    GalleryItem(
        id=1,
        title="Structural Rhythms",
        image_ref="sketch_architectural.png",
        description=(
            "A study of baroque architecture, exploring the dynamic interplay of light "
            "and shadow on stone facades. The rough charcoal texture captures the weight "
            "and history of the structure."
        ),
    ),
    GalleryItem(
        id=2,
        title="Motion in Graphite",
        image_ref="sketch_figure.png",
        description=(
            "Capturing the fleeting essence of movement through gestural lines. This piece "
            "focuses on the energy of the dancer rather than anatomical precision, using "
            "loose strokes to imply velocity."
        ),
    ),
    GalleryItem(
        id=3,
        title="Botanical Decay",
        image_ref="sketch_botanical.png",
        description=(
            "An ink and wash illustration examining the delicate beauty of a dried flower. "
            "Sepia tones and precise lining evoke the aesthetic of vintage scientific "
            "manuscripts."
        ),
    ),
)

_UNSPLASH = "https://images.unsplash.com/{}?q=80&w=1000&auto=format&fit=crop"

LOCAL_PHOTOS: Tuple[GalleryItem, ...] = (
    GalleryItem(1, "Urban Geometry", _UNSPLASH.format("photo-1486325212027-8081e485255e"),
                "Hidden patterns in the city skyline."),
    GalleryItem(2, "Golden Hour", _UNSPLASH.format("photo-1472214103451-9374bd1c7dd1"),
                "Light breaking through the shadows."),
    GalleryItem(3, "Neon Nights", _UNSPLASH.format("photo-1514565131-fce0801e5112"),
                "The city that never sleeps."),
    GalleryItem(4, "Minimalist Structure", _UNSPLASH.format("photo-1494145904049-0dca59b4bbad"),
                "Beauty in simplicity."),
    GalleryItem(5, "Reflections", _UNSPLASH.format("photo-1518133529323-96b4ec2b5572"),
                "A parallel world in the water."),
    GalleryItem(6, "Abstract Light", _UNSPLASH.format("photo-1550684848-fac1c5b4e853"),
                "Painting with photons."),
)

FALLBACK_TRACKS: Tuple[GalleryItem, ...] = (
    GalleryItem(
        id="dQw4w9WgXcQ",
        title="Loading...",
        image_ref=_UNSPLASH.format("photo-1470225620780-dba8ba36b745"),
        artist="Vibrissa",
    ),
)

ARTIST_STORIES: Tuple[ArtistStory, ...] = (
    ArtistStory(
        id=1,
        name="Leonardo da Vinci",
        era="Renaissance",
        quote="Simplicity is the ultimate sophistication.",
        short_desc="The architect of curiosity.",
        full_story=(
            "Leonardo believed that art and science were not separate disciplines, but two "
            "wings of the same bird. His notebooks reveal that true genius lies in the "
            "relentless observation of nature's smallest details, from the flow of water to "
            "the structure of a bird's wing. He teaches us that to create something timeless, "
            "one must first understand how the world truly works."
        ),
        bg_last="Da Vinci",
    ),
    ArtistStory(
        id=2,
        name="Gustav Klimt",
        era="Art Nouveau",
        quote="Truth is like fire; to tell the truth means to glow and burn.",
        short_desc="The master of gold.",
        full_story=(
            "Klimt proved that ornamentation isn't just decoration. It is a spiritual layer "
            "that elevates the human form to divinity. During his Golden Phase, he used actual "
            "gold leaf to create shimmering, mosaic-like patterns that enveloped his subjects. "
            "He inspires us to embrace opulence not as excess, but as a way to honor the "
            "sacredness of beauty."
        ),
        bg_last="Klimt",
    ),
    ArtistStory(
        id=3,
        name="Georgia O'Keeffe",
        era="Modernism",
        quote="I found I could say things with color and shapes that I couldn't say any other way.",
        short_desc="The visionary of form.",
        full_story=(
            "O'Keeffe taught us to look closer. By enlarging flowers to monumental proportions, "
            "she forced the busy world to stop and see what she saw. Her work stripped away the "
            "unnecessary, leaving only pure emotion and form. She reminds us that sometimes, the "
            "boldest statement is made by simply focusing on one beautiful thing."
        ),
        bg_last="O'Keeffe",
    ),
)
