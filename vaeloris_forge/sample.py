"""Sample manuscript exercising every construct of the dialect."""

SAMPLE_CONTENT = """\
# BOOK ONE
The Geography of Vaeloris

## Chapter 1: The Redreed Delta

The Redreed Delta stretches across the eastern lowlands, where the Silvervein River fragments into countless channels before meeting the Twilight Sea. This region is home to the Reedfolk, who have lived in harmony with pinnagryphs for generations.

**SIDEBAR [F]: Local Observation** (Reliability: High)
Source: Delta Warden's Field Notes
_"The best time to observe wild pinnagryphs is at dawn, when they emerge from the shallows to sun themselves on the sandbars."_

### Climate and Terrain

**Climate:** Warm and humid
**Terrain:** Marshland with scattered islands
**Notable Feature:** Bioluminescent reeds that glow at twilight

| Region | Climate | Pinnagryph Family |
|--------|---------|-------------------|
| Northern Marshes | Cool, Misty | Pinnatigris |
| Central Delta | Warm, Humid | Pinnapard |
| Coastal Flats | Hot, Salty | Pinnacheetah |

- Reed skiffs are the only reliable transport during the flood season
- Travellers should carry **fresh water** at all times

**SIDEBAR [V]: Healer's Guidance** (Reliability: High)
Source: Healer's Guild Compendium
Applies to: Riders and mounts alike
_"Always carry freshwater when traversing the delta. The brackish water can cause severe dehydration in both rider and mount."_

## Chapter 2: The Skyspine Range

Rising dramatically from the western plains, the Skyspine Mountains form the backbone of the continent.
"""
