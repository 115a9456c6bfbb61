# Copyright 2026 Firefly Software Solutions Inc.
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
"""Function interception: registry, dispatch wrapper and caller facade."""

from splice.patcher.binding import TargetBinding
from splice.patcher.dispatch import DispatchWrapper
from splice.patcher.facade import Patcher, create
from splice.patcher.properties import PatcherProperties
from splice.patcher.registry import PatchRegistry, Unpatch, default_registry
from splice.patcher.types import NOTHING, InterceptorRecord, Override, Phase, RecordDescriptor

__all__ = [
    "NOTHING",
    "DispatchWrapper",
    "InterceptorRecord",
    "Override",
    "PatchRegistry",
    "Patcher",
    "PatcherProperties",
    "Phase",
    "RecordDescriptor",
    "TargetBinding",
    "Unpatch",
    "create",
    "default_registry",
]
