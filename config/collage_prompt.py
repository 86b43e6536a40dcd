# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Fixed instruction sent with every pet photo."""

COLLAGE_PROMPT = """Generate an image using my photo:
Use a blue background with an overall bright and fair tone. 
The overall collage = 3x3 layout (nine images).
Each image inside the grid = portrait style (3:4).
Only show the pet’s face and the area above the chest.

First row (left to right):
	•	The pet sticks its tongue out slightly, looking happy.
	•	The pet bares its teeth, nose wrinkled, looking angry.
	•	One paw covers the face, cheeks blushing slightly, looking shy.

Second row:
	•	The pet lowers its ears, eyes drooping slightly, with a small frown, looking sad.
	•	The pet closes its left eye, keeps its right eye open, mouth smiling, as if winking playfully.
	•	With one paw raised, the pet smiles widely, looking like waving hand

Third row:
	•	The pet opens its eyes wide, mouth open, looking surprised.
	•	The pet yawns with mouth open, eyes squinting.
	•	The pet turns its head to the side, eyes open, looking thoughtful.

Each expression should vividly capture the pet’s “little emotions” in a lively and detailed way. Keep it realistic and photogenic, making the pet look extra cute. Maintain the original proportions without changing the pet’s details."""
